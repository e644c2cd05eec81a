from .assembly import assemble_report
from .diff import run_diff
from .matching import MatchResult, Violation, match, match_routes

__all__ = [
    "MatchResult",
    "Violation",
    "assemble_report",
    "match",
    "match_routes",
    "run_diff",
]
