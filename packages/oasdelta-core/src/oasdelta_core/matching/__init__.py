from .resolver import CycleStop, Resolved, Unresolved, pointer_name, resolve, resolve_node
from .result import MatchResult, Violation, aggregate, wrap
from .route_matcher import match_routes
from .schema_matcher import MAX_DEPTH, SchemaMatcher, match

__all__ = [
    "MAX_DEPTH",
    "CycleStop",
    "MatchResult",
    "Resolved",
    "SchemaMatcher",
    "Unresolved",
    "Violation",
    "aggregate",
    "match",
    "match_routes",
    "pointer_name",
    "resolve",
    "resolve_node",
    "wrap",
]
