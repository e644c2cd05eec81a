# oasdelta_core/models/report.py
from typing import Iterator

from pydantic import BaseModel, ConfigDict, Field

from oasdelta_core.models.severity import SEVERITIES, Category, Severity


class ViolationRecord(BaseModel):
    """A single classified difference: rule name, severity, category, message, and context."""

    model_config = ConfigDict(extra="ignore", frozen=True)
    rule: str
    severity: Severity
    category: Category
    description: str
    context: str
    details: dict = Field(default_factory=dict)


class MatchRecord(BaseModel):
    """Everything found for one schema or route."""

    model_config = ConfigDict(extra="ignore", frozen=True)
    name: str
    kind: str = "schema"  # "schema" | "route"
    severity: Severity = "Change"
    violations: list[ViolationRecord] = Field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.violations)


class DiffReport(BaseModel):
    """Complete comparison report with summary, overall severity, and results."""

    model_config = ConfigDict(extra="ignore", frozen=True)
    base: str | None = None
    current: str | None = None
    severity: Severity = "Change"
    summary: dict = Field(default_factory=dict)
    results: list[MatchRecord] = Field(default_factory=list)

    @property
    def schemas(self) -> list[MatchRecord]:
        return [r for r in self.results if r.kind == "schema"]

    @property
    def routes(self) -> list[MatchRecord]:
        return [r for r in self.results if r.kind == "route"]

    @property
    def violations(self) -> list[ViolationRecord]:
        return [v for r in self.results for v in r.violations]

    def grouped_by_severity(self) -> Iterator[tuple[Severity, list[MatchRecord]]]:
        """Changed results grouped Breaking, Warning, Change; empty groups are skipped."""
        for level in SEVERITIES:
            group = [r for r in self.results if r.changed and r.severity == level]
            if group:
                yield level, group
