"""
Turn matcher output into a serializable ``DiffReport``.

Matcher order is preserved. Ignored rule kinds are dropped here, and each
result's severity is recomputed from what remains.
"""

from collections.abc import Iterable

from oasdelta_core.matching.result import MatchResult, Violation
from oasdelta_core.models.policy import DiffPolicy
from oasdelta_core.models.report import DiffReport, MatchRecord, ViolationRecord
from oasdelta_core.models.severity import SEVERITIES, Severity, highest

_RULE_ANCHOR_FIELDS = {"schema_name", "property_path", "path", "method"}


def to_violation_record(violation: Violation) -> ViolationRecord:
    details = violation.rule.model_dump(exclude=_RULE_ANCHOR_FIELDS)
    return ViolationRecord(
        rule=violation.name,
        severity=violation.severity,
        category=violation.category,
        description=violation.description,
        context=violation.context,
        details=details,
    )


def to_match_record(result: MatchResult, kind: str, policy: DiffPolicy) -> MatchRecord:
    kept = [v for v in result.violations if not policy.is_ignored(v.name)]
    return MatchRecord(
        name=result.name,
        kind=kind,
        severity=highest(v.severity for v in kept),
        violations=[to_violation_record(v) for v in kept],
    )


def summarize(records: list[MatchRecord]) -> dict:
    by_severity: dict[Severity, int] = {level: 0 for level in SEVERITIES}
    violations_by_severity: dict[Severity, int] = {level: 0 for level in SEVERITIES}
    for record in records:
        if record.changed:
            by_severity[record.severity] += 1
        for v in record.violations:
            violations_by_severity[v.severity] += 1
    return {
        "results": len(records),
        "changed": sum(1 for r in records if r.changed),
        "violations": sum(len(r.violations) for r in records),
        "results_by_severity": by_severity,
        "violations_by_severity": violations_by_severity,
    }


def assemble_report(
    schema_results: Iterable[MatchResult],
    route_results: Iterable[MatchResult] = (),
    policy: DiffPolicy | None = None,
    *,
    base: str | None = None,
    current: str | None = None,
) -> DiffReport:
    policy = policy or DiffPolicy()
    records = [to_match_record(r, "schema", policy) for r in schema_results]
    records += [to_match_record(r, "route", policy) for r in route_results]
    if not policy.include_unchanged:
        records = [r for r in records if r.changed]

    return DiffReport(
        base=base,
        current=current,
        severity=highest(v.severity for r in records for v in r.violations),
        summary=summarize(records),
        results=records,
    )
