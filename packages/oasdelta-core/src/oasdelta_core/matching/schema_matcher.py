"""
Schema comparison engine.

Walks two versions of a named schema table and classifies every difference it
finds. One ``MatchResult`` is produced per schema name present in either
table, in lexicographic name order, so identical inputs always yield identical
output.

Recursion carries one visited-name set per side (the names followed on the
current path). A reference back onto that path, or nesting deeper than
``MAX_DEPTH``, silently ends the branch.
"""

import json
from typing import Any

from oasdelta_core.codebase.log import get_logger
from oasdelta_core.matching.resolver import CycleStop, Resolved, Unresolved, resolve_node
from oasdelta_core.matching.result import MatchResult, wrap
from oasdelta_core.models.openapi import SchemaNode, SchemaOrRef, SchemaTable
from oasdelta_core.rules.base import SchemaRule
from oasdelta_core.rules.schema import (
    ArrayItemsChanged,
    DescriptionChanged,
    EnumValuesAdded,
    EnumValuesRemoved,
    FormatChanged,
    NullableChanged,
    PropertyAdded,
    PropertyRemoved,
    RequiredPropertyAdded,
    RequiredPropertyRemoved,
    SchemaAdded,
    SchemaRemoved,
    SchemaUnresolved,
    TypeChanged,
    join_path,
)

_logger = get_logger("matcher")

MAX_DEPTH = 10


def _enum_key(value: Any) -> str:
    # enum literals may be unhashable (objects, lists)
    return json.dumps(value, sort_keys=True, default=str)


def _enum_difference(left: list[Any], right: list[Any]) -> list[Any]:
    """Values of ``left`` missing from ``right``, in ``left`` order, without repeats."""
    right_keys = {_enum_key(v) for v in right}
    seen: set[str] = set()
    out = []
    for value in left:
        key = _enum_key(value)
        if key in right_keys or key in seen:
            continue
        seen.add(key)
        out.append(value)
    return out


class SchemaMatcher:
    """Compare a base and a current schema table. Neither table is mutated."""

    def __init__(self, base_schemas: SchemaTable, current_schemas: SchemaTable):
        self.base_schemas = base_schemas
        self.current_schemas = current_schemas

    def match(self) -> list[MatchResult]:
        names = sorted(set(self.base_schemas) | set(self.current_schemas))
        results = [self.match_schema(name) for name in names]
        _logger.info(
            "compared %d schemas (%d base, %d current), %d changed",
            len(results),
            len(self.base_schemas),
            len(self.current_schemas),
            sum(1 for r in results if r.changed),
        )
        return results

    def match_schema(self, name: str) -> MatchResult:
        base = self.base_schemas.get(name)
        current = self.current_schemas.get(name)

        if current is None:
            rules: list[SchemaRule] = [SchemaRemoved(schema_name=name)]
        elif base is None:
            rules = [SchemaAdded(schema_name=name)]
        else:
            visited = frozenset({name})
            rules = self._compare(name, "", base, current, visited, visited, 0)

        result = MatchResult.from_violations(name, wrap(rules))
        _logger.debug("schema %s: %d violations, %s", name, len(result.violations), result.severity)
        return result

    def _compare(
        self,
        schema_name: str,
        path: str,
        base: SchemaOrRef,
        current: SchemaOrRef,
        base_visited: frozenset[str],
        current_visited: frozenset[str],
        depth: int,
    ) -> list[SchemaRule]:
        if depth >= MAX_DEPTH:
            _logger.debug("depth limit reached at %s.%s", schema_name, path)
            return []

        base_res = resolve_node(base, self.base_schemas, base_visited)
        current_res = resolve_node(current, self.current_schemas, current_visited)

        unresolved = self._unresolved(schema_name, path, base_res, current_res)
        if unresolved is not None:
            return [unresolved]
        if isinstance(base_res, Resolved) and isinstance(current_res, Resolved):
            return self._compare_nodes(
                schema_name,
                path,
                base_res.node,
                current_res.node,
                base_res.visited,
                current_res.visited,
                depth,
            )
        # a cycle stop on either side
        return []

    def _unresolved(
        self,
        schema_name: str,
        path: str,
        base_res: Resolved | Unresolved | CycleStop,
        current_res: Resolved | Unresolved | CycleStop,
    ) -> SchemaUnresolved | None:
        base_missing = isinstance(base_res, Unresolved)
        current_missing = isinstance(current_res, Unresolved)
        if not (base_missing or current_missing):
            return None

        if base_missing and current_missing:
            side = "base and current"
        else:
            side = "base" if base_missing else "current"
        first = base_res if base_missing else current_res
        _logger.debug("unresolved reference %s in %s (%s)", first.pointer, side, schema_name)
        return SchemaUnresolved(
            schema_name=schema_name,
            property_path=path,
            side=side,
            pointer=first.pointer,
            reason=first.reason,
        )

    def _compare_nodes(
        self,
        schema_name: str,
        path: str,
        base: SchemaNode,
        current: SchemaNode,
        base_visited: frozenset[str],
        current_visited: frozenset[str],
        depth: int,
    ) -> list[SchemaRule]:
        rules: list[SchemaRule] = []
        anchor = {"schema_name": schema_name, "property_path": path}

        if base.type_set != current.type_set:
            rules.append(TypeChanged(**anchor, old_type=sorted(base.type_set), new_type=sorted(current.type_set)))

        rules.extend(
            self._compare_properties(schema_name, path, base, current, base_visited, current_visited, depth)
        )

        if base.is_array and current.is_array:
            items_path = f"{path}[]"
            if base.items is not None and current.items is not None:
                rules.extend(
                    self._compare(
                        schema_name,
                        items_path,
                        base.items,
                        current.items,
                        base_visited,
                        current_visited,
                        depth + 1,
                    )
                )
            elif base.items is not None:
                rules.append(ArrayItemsChanged(**anchor, change="items no longer declared"))
            elif current.items is not None:
                rules.append(ArrayItemsChanged(**anchor, change="items declared where none were"))

        base_enum = base.enum or []
        current_enum = current.enum or []
        removed = _enum_difference(base_enum, current_enum)
        if removed:
            rules.append(EnumValuesRemoved(**anchor, values=removed))
        added = _enum_difference(current_enum, base_enum)
        if added:
            rules.append(EnumValuesAdded(**anchor, values=added))

        if base.format != current.format:
            rules.append(FormatChanged(**anchor, old_format=base.format, new_format=current.format))

        if base.is_nullable != current.is_nullable:
            rules.append(NullableChanged(**anchor, old_nullable=base.is_nullable, new_nullable=current.is_nullable))

        if base.description != current.description:
            rules.append(
                DescriptionChanged(
                    **anchor,
                    old_description=base.description,
                    new_description=current.description,
                )
            )

        return rules

    def _compare_properties(
        self,
        schema_name: str,
        path: str,
        base: SchemaNode,
        current: SchemaNode,
        base_visited: frozenset[str],
        current_visited: frozenset[str],
        depth: int,
    ) -> list[SchemaRule]:
        rules: list[SchemaRule] = []
        base_props = base.properties
        current_props = current.properties
        base_required = set(base.required)
        current_required = set(current.required)

        for prop, base_prop in base_props.items():
            child = join_path(path, prop)
            anchor = {"schema_name": schema_name, "property_path": child, "property_name": prop}
            if prop not in current_props:
                rules.append(PropertyRemoved(**anchor, was_required=prop in base_required))
                continue

            if prop in base_required and prop not in current_required:
                rules.append(RequiredPropertyRemoved(**anchor))
            elif prop not in base_required and prop in current_required:
                rules.append(RequiredPropertyAdded(**anchor, existed=True))

            rules.extend(
                self._compare(
                    schema_name,
                    child,
                    base_prop,
                    current_props[prop],
                    base_visited,
                    current_visited,
                    depth + 1,
                )
            )

        for prop in current_props:
            if prop in base_props:
                continue
            anchor = {"schema_name": schema_name, "property_path": join_path(path, prop), "property_name": prop}
            if prop in current_required:
                rules.append(RequiredPropertyAdded(**anchor))
            else:
                rules.append(PropertyAdded(**anchor))

        # required names without a property declaration on either side
        declared = base_props.keys() | current_props.keys()
        for prop in dict.fromkeys(current.required):
            if prop not in declared and prop not in base_required:
                rules.append(
                    RequiredPropertyAdded(schema_name=schema_name, property_path=join_path(path, prop), property_name=prop)
                )
        for prop in dict.fromkeys(base.required):
            if prop not in declared and prop not in current_required:
                rules.append(
                    RequiredPropertyRemoved(schema_name=schema_name, property_path=join_path(path, prop), property_name=prop)
                )

        return rules


def match(base_schemas: SchemaTable, current_schemas: SchemaTable) -> list[MatchResult]:
    """Compare two schema tables; one result per name in either, sorted by name."""
    return SchemaMatcher(base_schemas, current_schemas).match()
