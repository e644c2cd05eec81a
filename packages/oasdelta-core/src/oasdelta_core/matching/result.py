from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, SerializeAsAny

from oasdelta_core.models.severity import Category, Severity, highest
from oasdelta_core.rules.base import BaseRule


class Violation(BaseModel):
    """One detected difference; wraps exactly one rule value."""

    model_config = ConfigDict(frozen=True)
    rule: SerializeAsAny[BaseRule]

    @property
    def name(self) -> str:
        return self.rule.name

    @property
    def description(self) -> str:
        return self.rule.description

    @property
    def severity(self) -> Severity:
        return self.rule.severity

    @property
    def category(self) -> Category:
        return self.rule.category

    @property
    def context(self) -> str:
        return self.rule.context


def aggregate(violations: Iterable[Violation]) -> Severity:
    """Overall severity: the highest one present, Change when there is none."""
    return highest(v.severity for v in violations)


class MatchResult(BaseModel):
    """All violations found for one schema name (or one route) and their overall severity."""

    model_config = ConfigDict(frozen=True)
    name: str
    violations: tuple[Violation, ...] = ()
    severity: Severity = "Change"

    @classmethod
    def from_violations(cls, name: str, violations: Iterable[Violation]) -> "MatchResult":
        violations = tuple(violations)
        return cls(name=name, violations=violations, severity=aggregate(violations))

    @property
    def changed(self) -> bool:
        return bool(self.violations)


def wrap(rules: Iterable[BaseRule]) -> list[Violation]:
    return [Violation(rule=rule) for rule in rules]
