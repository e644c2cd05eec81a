import pytest
from pydantic import TypeAdapter

from oasdelta_core.assembly import assemble_report
from oasdelta_core.matching.schema_matcher import match
from oasdelta_core.models.openapi import SchemaTable
from oasdelta_core.models.policy import DiffPolicy

_TABLE = TypeAdapter(SchemaTable)


@pytest.fixture
def sample_results():
    base = _TABLE.validate_python(
        {
            "Legacy": {"type": "object"},
            "Same": {"type": "string"},
            "Stamp": {"type": "string", "format": "date", "description": "when"},
        }
    )
    current = _TABLE.validate_python(
        {
            "New": {"type": "object"},
            "Same": {"type": "string"},
            "Stamp": {"type": "string", "format": "date-time", "description": "when it happened"},
        }
    )
    # Legacy: Breaking, New: Change, Same: unchanged, Stamp: Warning + Change
    return match(base, current)


class TestAssembleReport:
    def test_preserves_order_and_severity(self, sample_results):
        report = assemble_report(sample_results)

        assert [r.name for r in report.results] == ["Legacy", "New", "Same", "Stamp"]
        assert [r.severity for r in report.results] == ["Breaking", "Change", "Change", "Warning"]
        assert report.severity == "Breaking"
        assert all(r.kind == "schema" for r in report.results)

    def test_summary_counts(self, sample_results):
        summary = assemble_report(sample_results).summary

        assert summary["results"] == 4
        assert summary["changed"] == 3
        assert summary["violations"] == 4
        assert summary["results_by_severity"] == {"Breaking": 1, "Warning": 1, "Change": 1}
        assert summary["violations_by_severity"] == {"Breaking": 1, "Warning": 1, "Change": 2}

    def test_violation_record_fields(self, sample_results):
        report = assemble_report(sample_results)
        stamp = report.results[3]

        fmt = stamp.violations[0]
        assert fmt.rule == "FormatChanged"
        assert fmt.category == "Schema"
        assert fmt.context == "schema: Stamp"
        assert fmt.details == {"old_format": "date", "new_format": "date-time"}

    def test_ignored_rules_reaggregate(self, sample_results):
        policy = DiffPolicy(ignore_rules=["SchemaRemoved", "FormatChanged"])
        report = assemble_report(sample_results, policy=policy)

        legacy = report.results[0]
        assert legacy.violations == []
        assert legacy.severity == "Change"
        assert report.results[3].severity == "Change"
        assert report.severity == "Change"

    def test_exclude_unchanged(self, sample_results):
        report = assemble_report(sample_results, policy=DiffPolicy(include_unchanged=False))
        assert [r.name for r in report.results] == ["Legacy", "New", "Stamp"]

    def test_grouped_by_severity(self, sample_results):
        report = assemble_report(sample_results)
        groups = [(level, [r.name for r in group]) for level, group in report.grouped_by_severity()]

        assert groups == [("Breaking", ["Legacy"]), ("Warning", ["Stamp"]), ("Change", ["New"])]

    def test_serializes(self, sample_results):
        dumped = assemble_report(sample_results, base="v1.yaml", current="v2.yaml").model_dump()

        assert dumped["base"] == "v1.yaml"
        assert dumped["severity"] == "Breaking"
        assert dumped["results"][0]["violations"][0]["rule"] == "SchemaRemoved"

    def test_empty_input(self):
        report = assemble_report([])
        assert report.results == []
        assert report.severity == "Change"
        assert report.summary["violations"] == 0
