from collections.abc import Iterable
from typing import Literal

Severity = Literal["Breaking", "Warning", "Change"]
Category = Literal["Schema", "Endpoint", "Parameter", "Response", "RequestBody"]

# Breaking > Warning > Change
SEVERITY_RANK: dict[Severity, int] = {
    "Change": 0,
    "Warning": 1,
    "Breaking": 2,
}

SEVERITIES: tuple[Severity, ...] = ("Breaking", "Warning", "Change")
CATEGORIES: tuple[Category, ...] = ("Schema", "Endpoint", "Parameter", "Response", "RequestBody")


def severity_at_least(severity: Severity, threshold: Severity) -> bool:
    """True when ``severity`` ranks at or above ``threshold``."""
    return SEVERITY_RANK[severity] >= SEVERITY_RANK[threshold]


def highest(severities: Iterable[Severity]) -> Severity:
    """Highest severity present, Change when there is none."""
    overall: Severity = "Change"
    for severity in severities:
        if SEVERITY_RANK[severity] > SEVERITY_RANK[overall]:
            overall = severity
            if overall == "Breaking":
                break
    return overall
