"""End-to-end comparison of two OpenAPI documents on disk."""

from pathlib import Path

from oasdelta_core.assembly import assemble_report
from oasdelta_core.codebase.log import get_logger
from oasdelta_core.data.openapi_loader import load_openapi_document, schema_table
from oasdelta_core.data.policy import load_diff_policy
from oasdelta_core.matching.route_matcher import match_routes
from oasdelta_core.matching.schema_matcher import match
from oasdelta_core.models.policy import DiffPolicy
from oasdelta_core.models.report import DiffReport

_logger = get_logger("diff")


def run_diff(
    base_path: str | Path,
    current_path: str | Path,
    policy_path: str | Path | None = None,
    *,
    policy: DiffPolicy | None = None,
) -> DiffReport:
    """Load both documents, compare schemas (and routes unless disabled), and assemble the report.

    An explicit ``policy`` wins over ``policy_path``.
    """
    if policy is None:
        policy = load_diff_policy(policy_path)

    base = load_openapi_document(base_path)
    current = load_openapi_document(current_path)
    _logger.info("comparing %s -> %s", base_path, current_path)

    schema_results = match(schema_table(base), schema_table(current))
    route_results = match_routes(base.paths, current.paths, schema_results) if policy.compare_routes else []

    report = assemble_report(
        schema_results,
        route_results,
        policy,
        base=str(base_path),
        current=str(current_path),
    )
    _logger.info("overall severity %s (%d violations)", report.severity, report.summary["violations"])
    return report
