"""Tests for the difference rule kinds and severity aggregation."""

import pytest

from oasdelta_core.matching.result import MatchResult, aggregate, wrap
from oasdelta_core.models.severity import SEVERITY_RANK, highest, severity_at_least
from oasdelta_core.rules import (
    ALL_RULES,
    EnumValuesRemoved,
    NullableChanged,
    ParameterRemoved,
    PropertyAdded,
    RequestBodyBecameRequired,
    RequestSchemaViolation,
    ResponseSchemaChanged,
    ResponseStatusRemoved,
    RouteAdded,
    SchemaRemoved,
    SchemaUnresolved,
    TypeChanged,
)


class TestRuleRegistry:
    def test_names_unique(self):
        names = [r.NAME for r in ALL_RULES]
        assert len(names) == len(set(names))

    def test_every_rule_documented(self):
        for rule in ALL_RULES:
            assert rule.NAME, rule
            assert rule.SUMMARY, rule
            assert rule.SEVERITY in SEVERITY_RANK


class TestSchemaRules:
    def test_context_without_property(self):
        rule = SchemaRemoved(schema_name="Legacy")
        assert rule.context == "schema: Legacy"
        assert rule.category == "Schema"
        assert rule.severity == "Breaking"

    def test_context_with_property(self):
        rule = PropertyAdded(schema_name="User", property_path="address.zip", property_name="zip")
        assert rule.context == "schema: User, property: address.zip"
        assert rule.description == "Property 'zip' was added"

    def test_enum_values_rendered(self):
        rule = EnumValuesRemoved(schema_name="Status", values=["C", 3])
        assert rule.description == 'Enum values removed: ["C", 3]'

    def test_type_change_description(self):
        rule = TypeChanged(schema_name="T", old_type=["integer"], new_type=[])
        assert rule.description == "Type changed from 'integer' to '(none)'"

    def test_unresolved_description(self):
        rule = SchemaUnresolved(schema_name="P", side="base", pointer="#/x", reason="not a local schema pointer")
        assert rule.severity == "Change"
        assert rule.description == "Reference '#/x' in base document could not be resolved: not a local schema pointer"

    @pytest.mark.parametrize(
        "old,new,expected",
        [(True, False, "Breaking"), (False, True, "Warning"), (True, True, "Change")],
    )
    def test_nullable_severity_follows_direction(self, old, new, expected):
        rule = NullableChanged(schema_name="N", old_nullable=old, new_nullable=new)
        assert rule.severity == expected

    def test_rules_are_frozen(self):
        rule = SchemaRemoved(schema_name="Legacy")
        with pytest.raises(Exception):
            rule.schema_name = "Other"


class TestRouteRules:
    def test_route_context(self):
        rule = RouteAdded(path="/pets", method="get")
        assert rule.context == "route: GET /pets"
        assert rule.description == "Route added: GET /pets"
        assert rule.category == "Endpoint"

    def test_parameter_context(self):
        rule = ParameterRemoved(path="/pets", method="get", parameter_name="limit", parameter_in="query")
        assert rule.category == "Parameter"
        assert rule.context == "route: GET /pets, parameter: limit (in: query)"

    def test_response_and_body_categories(self):
        assert ResponseStatusRemoved(path="/p", method="post", status_code="201").category == "Response"
        assert RequestBodyBecameRequired(path="/p", method="post").category == "RequestBody"

    def test_schema_use_takes_change_severity(self):
        use = dict(path="/pets", method="post", used_schema="Pet", content_type="application/json")
        change = dict(schema_rule="DescriptionChanged", change_description="Description changed", change_context="schema: Pet")

        assert RequestSchemaViolation(**use, **change, change_severity="Change").severity == "Change"
        breaking = RequestSchemaViolation(**use, **change, change_severity="Breaking")
        assert breaking.severity == "Breaking"
        assert breaking.context == "route: POST /pets, schema: Pet"

    def test_response_schema_changed_description(self):
        rule = ResponseSchemaChanged(
            path="/pets", method="get", status_code="200", content_type="application/json", old_schema="Pet", new_schema="Animal"
        )
        assert rule.description == "Response schema for status 200 (application/json) changed from 'Pet' to 'Animal'"
        assert rule.severity == "Breaking"


class TestAggregation:
    """Breaking > Warning > Change; no violations means Change."""

    def test_empty_is_change(self):
        assert aggregate([]) == "Change"
        assert highest([]) == "Change"

    def test_highest_wins(self):
        assert highest(["Change", "Warning", "Change"]) == "Warning"
        assert highest(["Warning", "Breaking", "Change"]) == "Breaking"

    def test_monotonic(self):
        levels = ["Change", "Warning", "Breaking"]
        for base in levels:
            for extra in levels:
                assert SEVERITY_RANK[highest([base, extra])] >= SEVERITY_RANK[highest([base])]

    def test_match_result_severity(self):
        violations = wrap(
            [
                PropertyAdded(schema_name="U", property_path="x", property_name="x"),
                NullableChanged(schema_name="U", old_nullable=False, new_nullable=True),
            ]
        )
        result = MatchResult.from_violations("U", violations)
        assert result.severity == "Warning"
        assert result.changed

    def test_severity_at_least(self):
        assert severity_at_least("Breaking", "Warning")
        assert severity_at_least("Warning", "Warning")
        assert not severity_at_least("Change", "Warning")
