import pytest
from pydantic import TypeAdapter

from oasdelta_core.matching.resolver import (
    CycleStop,
    Resolved,
    Unresolved,
    pointer_name,
    resolve,
    resolve_node,
)
from oasdelta_core.models.openapi import SchemaNode, SchemaRef, SchemaTable


@pytest.fixture
def sample_table() -> SchemaTable:
    return TypeAdapter(SchemaTable).validate_python(
        {
            "Pet": {"type": "object"},
            "PetAlias": {"$ref": "#/components/schemas/Pet"},
            "Loop": {"$ref": "#/components/schemas/Loop"},
            "a/b": {"type": "string"},
        }
    )


class TestPointerName:
    def test_components_pointer(self):
        assert pointer_name("#/components/schemas/Pet") == "Pet"

    def test_definitions_pointer(self):
        assert pointer_name("#/definitions/Pet") == "Pet"

    def test_escaped_pointer(self):
        assert pointer_name("#/components/schemas/a~1b") == "a/b"

    def test_external_pointer(self):
        assert pointer_name("other.yaml#/components/schemas/Pet") is None
        assert pointer_name("#/components/schemas/") is None


class TestResolve:
    def test_resolves_and_extends_visited(self, sample_table):
        result = resolve("#/components/schemas/Pet", sample_table, frozenset({"Root"}))

        assert isinstance(result, Resolved)
        assert result.node.type == ["object"]
        assert result.visited == {"Root", "Pet"}

    def test_follows_alias(self, sample_table):
        result = resolve("#/components/schemas/PetAlias", sample_table, frozenset())

        assert isinstance(result, Resolved)
        assert result.visited == {"PetAlias", "Pet"}

    def test_missing_name(self, sample_table):
        result = resolve("#/components/schemas/Nope", sample_table, frozenset())

        assert isinstance(result, Unresolved)
        assert "Nope" in result.reason

    def test_external_pointer_is_unresolved(self, sample_table):
        result = resolve("common.yaml#/Pet", sample_table, frozenset())
        assert isinstance(result, Unresolved)

    def test_visited_name_stops(self, sample_table):
        result = resolve("#/components/schemas/Pet", sample_table, frozenset({"Pet"}))

        assert isinstance(result, CycleStop)
        assert result.name == "Pet"

    def test_self_alias_stops(self, sample_table):
        assert isinstance(resolve("#/components/schemas/Loop", sample_table, frozenset()), CycleStop)

    def test_escaped_name(self, sample_table):
        result = resolve("#/components/schemas/a~1b", sample_table, frozenset())
        assert isinstance(result, Resolved)


def test_resolve_node_passes_concrete_nodes_through(sample_table):
    node = SchemaNode(type="string")
    visited = frozenset({"X"})

    result = resolve_node(node, sample_table, visited)
    assert result == Resolved(node=node, visited=visited)

    via_ref = resolve_node(SchemaRef(ref="#/components/schemas/Pet"), sample_table, visited)
    assert isinstance(via_ref, Resolved)
