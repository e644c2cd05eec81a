"""End-to-end comparison of the pet store fixtures."""

from pathlib import Path

import pytest

from oasdelta_core.diff import run_diff
from oasdelta_core.models.policy import DiffPolicy

FIXTURES = Path(__file__).parent / "fixtures" / "openapi"


@pytest.fixture
def sample_report():
    return run_diff(FIXTURES / "base.yaml", FIXTURES / "current.yaml", policy=DiffPolicy())


def rules_of(report, name: str) -> list[str]:
    record = next(r for r in report.results if r.name == name)
    return [v.rule for v in record.violations]


class TestRunDiff:
    def test_result_order(self, sample_report):
        assert [r.name for r in sample_report.schemas] == ["Legacy", "Owner", "Pet", "Status"]
        assert [r.name for r in sample_report.routes] == [
            "GET /owners",
            "GET /pets",
            "POST /pets",
            "DELETE /pets/{id}",
        ]

    def test_schema_findings(self, sample_report):
        assert rules_of(sample_report, "Legacy") == ["SchemaRemoved"]
        assert rules_of(sample_report, "Owner") == ["SchemaAdded"]
        assert rules_of(sample_report, "Pet") == [
            "FormatChanged",
            "RequiredPropertyAdded",
            "EnumValuesRemoved",
            "EnumValuesAdded",
        ]
        assert rules_of(sample_report, "Status") == ["EnumValuesRemoved", "EnumValuesAdded"]

    def test_route_findings(self, sample_report):
        assert rules_of(sample_report, "GET /owners") == ["RouteAdded"]
        assert rules_of(sample_report, "GET /pets") == [
            "RouteSummaryChanged",
            "RequiredParameterAdded",
            "ResponseStatusAdded",
        ]
        assert rules_of(sample_report, "POST /pets") == ["RequestBodyBecameRequired"]
        assert rules_of(sample_report, "DELETE /pets/{id}") == ["RouteRemoved"]

    def test_summary(self, sample_report):
        assert sample_report.severity == "Breaking"
        assert sample_report.summary["results"] == 8
        assert sample_report.summary["violations"] == 14
        assert sample_report.summary["violations_by_severity"] == {"Breaking": 7, "Warning": 1, "Change": 6}

    def test_routes_disabled(self):
        report = run_diff(
            FIXTURES / "base.yaml",
            FIXTURES / "current.yaml",
            policy=DiffPolicy(compare_routes=False),
        )
        assert report.routes == []
        assert len(report.schemas) == 4

    def test_policy_file(self, monkeypatch):
        monkeypatch.delenv("OASDELTA_IGNORE_RULES", raising=False)
        monkeypatch.delenv("OASDELTA_FAIL_ON", raising=False)
        report = run_diff(FIXTURES / "base.yaml", FIXTURES / "current.yaml", FIXTURES / "policy.yaml")

        assert rules_of(report, "GET /pets") == ["RequiredParameterAdded", "ResponseStatusAdded"]
        assert all(r.changed for r in report.results)
