"""
Reference resolution inside one document's schema table.

``resolve`` never raises for bad pointers: a pointer that names nothing comes
back as ``Unresolved`` and a pointer that loops back onto the current
comparison path comes back as ``CycleStop``. Callers report the former once
and silently stop on the latter.
"""

from dataclasses import dataclass, field

from oasdelta_core.codebase.log import get_logger
from oasdelta_core.models.openapi import SchemaNode, SchemaOrRef, SchemaRef, SchemaTable

_logger = get_logger("resolver")

POINTER_PREFIXES = ("#/components/schemas/", "#/definitions/")


@dataclass(frozen=True)
class Unresolved:
    pointer: str
    reason: str


@dataclass(frozen=True)
class CycleStop:
    pointer: str
    name: str


@dataclass(frozen=True)
class Resolved:
    """Concrete node plus the visited-name set extended with every name followed."""

    node: SchemaNode
    visited: frozenset[str] = field(default_factory=frozenset)


def pointer_name(pointer: str) -> str | None:
    """Schema name a local pointer designates, or None if it is not one."""
    for prefix in POINTER_PREFIXES:
        if pointer.startswith(prefix):
            name = pointer[len(prefix):]
            # JSON pointer escapes
            return name.replace("~1", "/").replace("~0", "~") or None
    return None


def resolve(pointer: str, table: SchemaTable, visited: frozenset[str]) -> Resolved | Unresolved | CycleStop:
    name = pointer_name(pointer)
    if name is None:
        _logger.debug("pointer %s is not a local schema pointer", pointer)
        return Unresolved(pointer=pointer, reason="not a local schema pointer")

    if name in visited:
        _logger.debug("cycle on %s (path %s), stopping", name, sorted(visited))
        return CycleStop(pointer=pointer, name=name)

    target = table.get(name)
    if target is None:
        _logger.debug("pointer %s names unknown schema %s", pointer, name)
        return Unresolved(pointer=pointer, reason=f"schema '{name}' not found")

    visited = visited | {name}
    if isinstance(target, SchemaRef):
        # alias schema: follow it, still guarded by the visited set
        return resolve(target.ref, table, visited)
    return Resolved(node=target, visited=visited)


def resolve_node(node: SchemaOrRef, table: SchemaTable, visited: frozenset[str]) -> Resolved | Unresolved | CycleStop:
    """Resolve ``node`` if it is a reference; concrete nodes pass through."""
    if isinstance(node, SchemaRef):
        return resolve(node.ref, table, visited)
    return Resolved(node=node, visited=visited)
