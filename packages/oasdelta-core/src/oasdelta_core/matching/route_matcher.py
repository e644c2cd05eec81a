"""
Operation-level comparison.

Every ``METHOD /path`` present in either document yields one ``MatchResult``
named after the route, ordered by path and then by ``HTTP_METHODS``.

When schema results are supplied, a route present in both documents also
carries every change of a component schema its current request body or
responses use, with that change's severity.
"""

from collections.abc import Iterable

from oasdelta_core.codebase.log import get_logger
from oasdelta_core.matching.resolver import pointer_name
from oasdelta_core.matching.result import MatchResult, Violation, wrap
from oasdelta_core.models.openapi import HTTP_METHODS, MediaType, Operation, PathItem, SchemaNode, SchemaRef
from oasdelta_core.rules.base import RouteRule
from oasdelta_core.rules.route import (
    ParameterRemoved,
    RequestBodyBecameRequired,
    RequestSchemaChanged,
    RequestSchemaViolation,
    RequiredParameterAdded,
    ResponseSchemaChanged,
    ResponseSchemaViolation,
    ResponseStatusAdded,
    ResponseStatusRemoved,
    RouteAdded,
    RouteDescriptionChanged,
    RouteRemoved,
    RouteSummaryChanged,
)

_logger = get_logger("routes")

# schema name -> violations found for it
SchemaChanges = dict[str, tuple[Violation, ...]]


def route_name(path: str, method: str) -> str:
    return f"{method.upper()} {path}"


def _body_required(op: Operation) -> bool:
    return op.request_body is not None and op.request_body.required


def referenced_schema(media: MediaType) -> str | None:
    """Component schema a content entry uses, directly or as its array items."""
    node = media.media_schema
    if isinstance(node, SchemaNode) and node.is_array:
        node = node.items
    if isinstance(node, SchemaRef):
        return pointer_name(node.ref)
    return None


def request_schemas(op: Operation) -> dict[str, str]:
    """``content type -> schema name`` for the request body."""
    if op.request_body is None:
        return {}
    out = {}
    for content_type, media in op.request_body.content.items():
        name = referenced_schema(media)
        if name is not None:
            out[content_type] = name
    return out


def response_schemas(op: Operation) -> dict[tuple[str, str], str]:
    """``(status, content type) -> schema name`` over all responses."""
    out = {}
    for status, response in op.responses.items():
        for content_type, media in response.content.items():
            name = referenced_schema(media)
            if name is not None:
                out[(status, content_type)] = name
    return out


def compare_operations(path: str, method: str, base: Operation, current: Operation) -> list[RouteRule]:
    rules: list[RouteRule] = []
    route = {"path": path, "method": method}

    # text changes only count when both sides document something
    if base.summary and current.summary and base.summary != current.summary:
        rules.append(RouteSummaryChanged(**route, old_summary=base.summary, new_summary=current.summary))
    if base.description and current.description and base.description != current.description:
        rules.append(
            RouteDescriptionChanged(
                **route,
                old_description=base.description,
                new_description=current.description,
            )
        )

    base_params = {p.key: p for p in base.parameters}
    current_params = {p.key: p for p in current.parameters}
    for key, param in current_params.items():
        if key not in base_params and param.required:
            rules.append(RequiredParameterAdded(**route, parameter_name=param.name, parameter_in=param.location))
    for key, param in base_params.items():
        if key not in current_params:
            rules.append(ParameterRemoved(**route, parameter_name=param.name, parameter_in=param.location))

    if not _body_required(base) and _body_required(current):
        rules.append(RequestBodyBecameRequired(**route))

    base_request = request_schemas(base)
    for content_type, name in request_schemas(current).items():
        old = base_request.get(content_type)
        if old is not None and old != name:
            rules.append(RequestSchemaChanged(**route, content_type=content_type, old_schema=old, new_schema=name))

    for status in current.responses:
        if status not in base.responses:
            rules.append(ResponseStatusAdded(**route, status_code=status))
    for status in base.responses:
        if status not in current.responses:
            rules.append(ResponseStatusRemoved(**route, status_code=status))

    base_response = response_schemas(base)
    for (status, content_type), name in response_schemas(current).items():
        old = base_response.get((status, content_type))
        if old is not None and old != name:
            rules.append(
                ResponseSchemaChanged(
                    **route,
                    status_code=status,
                    content_type=content_type,
                    old_schema=old,
                    new_schema=name,
                )
            )

    return rules


def schema_changes_for_route(path: str, method: str, op: Operation, changes: SchemaChanges) -> list[RouteRule]:
    """Schema violations of every component schema ``op`` uses, anchored at the route."""
    rules: list[RouteRule] = []
    route = {"path": path, "method": method}

    for content_type, name in request_schemas(op).items():
        for v in changes.get(name, ()):
            rules.append(
                RequestSchemaViolation(
                    **route,
                    used_schema=name,
                    content_type=content_type,
                    schema_rule=v.name,
                    change_description=v.description,
                    change_context=v.context,
                    change_severity=v.severity,
                )
            )

    for (status, content_type), name in response_schemas(op).items():
        for v in changes.get(name, ()):
            rules.append(
                ResponseSchemaViolation(
                    **route,
                    status_code=status,
                    used_schema=name,
                    content_type=content_type,
                    schema_rule=v.name,
                    change_description=v.description,
                    change_context=v.context,
                    change_severity=v.severity,
                )
            )

    return rules


def match_route(
    path: str,
    method: str,
    base: Operation | None,
    current: Operation | None,
    changes: SchemaChanges | None = None,
) -> MatchResult:
    if current is None:
        rules: list[RouteRule] = [RouteRemoved(path=path, method=method)]
    elif base is None:
        rules = [RouteAdded(path=path, method=method)]
    else:
        rules = compare_operations(path, method, base, current)
        if changes:
            rules.extend(schema_changes_for_route(path, method, current, changes))
    return MatchResult.from_violations(route_name(path, method), wrap(rules))


def match_routes(
    base_paths: dict[str, PathItem],
    current_paths: dict[str, PathItem],
    schema_results: Iterable[MatchResult] = (),
) -> list[MatchResult]:
    """Compare the operations of two ``paths`` tables.

    ``schema_results`` (from the schema matcher) lets routes report changes
    in the schemas they use.
    """
    changes: SchemaChanges = {r.name: r.violations for r in schema_results if r.changed}

    results = []
    for path in sorted(set(base_paths) | set(current_paths)):
        base_item = base_paths.get(path)
        current_item = current_paths.get(path)
        for method in HTTP_METHODS:
            base_op = base_item.operation(method) if base_item else None
            current_op = current_item.operation(method) if current_item else None
            if base_op is None and current_op is None:
                continue
            results.append(match_route(path, method, base_op, current_op, changes))

    _logger.info("compared %d routes, %d changed", len(results), sum(1 for r in results if r.changed))
    return results
