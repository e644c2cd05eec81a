"""
Schema difference kinds.

Each class is one entry of the classification taxonomy. Severities are fixed
per kind except for ``NullableChanged``, whose severity follows the direction
of the change:

    nullable -> non-nullable   Breaking  (consumers sending/expecting null break)
    non-nullable -> nullable   Warning   (consumers may now receive null)
"""

import json
from typing import Any, ClassVar

from oasdelta_core.models.severity import Severity
from oasdelta_core.rules.base import SchemaRule


def _render_values(values: list[Any]) -> str:
    return ", ".join(json.dumps(v, sort_keys=True, default=str) for v in values)


def _or_none(value: str | None) -> str:
    return "(none)" if value is None else value


def join_path(parent: str, child: str) -> str:
    return f"{parent}.{child}" if parent else child


class SchemaAdded(SchemaRule):
    NAME = "SchemaAdded"
    SEVERITY: ClassVar[Severity] = "Change"
    SUMMARY = "schema only present in the current document"

    @property
    def description(self) -> str:
        return f"Schema '{self.schema_name}' was added"


class SchemaRemoved(SchemaRule):
    NAME = "SchemaRemoved"
    SEVERITY: ClassVar[Severity] = "Breaking"
    SUMMARY = "schema only present in the base document"

    @property
    def description(self) -> str:
        return f"Schema '{self.schema_name}' was removed"


class SchemaUnresolved(SchemaRule):
    NAME = "SchemaUnresolved"
    SEVERITY: ClassVar[Severity] = "Change"
    SUMMARY = "reference could not be resolved; comparison stopped there"

    side: str
    pointer: str
    reason: str = ""

    @property
    def description(self) -> str:
        text = f"Reference '{self.pointer}' in {self.side} document could not be resolved"
        return f"{text}: {self.reason}" if self.reason else text


class TypeChanged(SchemaRule):
    NAME = "TypeChanged"
    SEVERITY: ClassVar[Severity] = "Breaking"
    SUMMARY = "declared type-set differs"

    old_type: list[str]
    new_type: list[str]

    @property
    def description(self) -> str:
        old = " | ".join(self.old_type) or "(none)"
        new = " | ".join(self.new_type) or "(none)"
        return f"Type changed from '{old}' to '{new}'"


class PropertyAdded(SchemaRule):
    NAME = "PropertyAdded"
    SEVERITY: ClassVar[Severity] = "Change"
    SUMMARY = "optional property added"

    property_name: str

    @property
    def description(self) -> str:
        return f"Property '{self.property_name}' was added"


class PropertyRemoved(SchemaRule):
    NAME = "PropertyRemoved"
    SEVERITY: ClassVar[Severity] = "Breaking"
    SUMMARY = "property removed (reported once, required or not)"

    property_name: str
    was_required: bool = False

    @property
    def description(self) -> str:
        if self.was_required:
            return f"Required property '{self.property_name}' was removed"
        return f"Property '{self.property_name}' was removed"


class RequiredPropertyAdded(SchemaRule):
    NAME = "RequiredPropertyAdded"
    SEVERITY: ClassVar[Severity] = "Breaking"
    SUMMARY = "new mandatory property, or existing property became required"

    property_name: str
    existed: bool = False

    @property
    def description(self) -> str:
        if self.existed:
            return f"Property '{self.property_name}' became required"
        return f"Required property '{self.property_name}' was added"


class RequiredPropertyRemoved(SchemaRule):
    NAME = "RequiredPropertyRemoved"
    SEVERITY: ClassVar[Severity] = "Change"
    SUMMARY = "property kept but no longer required"

    property_name: str

    @property
    def description(self) -> str:
        return f"Property '{self.property_name}' is no longer required"


class EnumValuesAdded(SchemaRule):
    NAME = "EnumValuesAdded"
    SEVERITY: ClassVar[Severity] = "Change"
    SUMMARY = "enumeration accepts new literals"

    values: list[Any]

    @property
    def description(self) -> str:
        return f"Enum values added: [{_render_values(self.values)}]"


class EnumValuesRemoved(SchemaRule):
    NAME = "EnumValuesRemoved"
    SEVERITY: ClassVar[Severity] = "Breaking"
    SUMMARY = "enumeration no longer accepts literals it used to"

    values: list[Any]

    @property
    def description(self) -> str:
        return f"Enum values removed: [{_render_values(self.values)}]"


class FormatChanged(SchemaRule):
    NAME = "FormatChanged"
    SEVERITY: ClassVar[Severity] = "Warning"
    SUMMARY = "format constraint changed"

    old_format: str | None = None
    new_format: str | None = None

    @property
    def description(self) -> str:
        return f"Format changed from '{_or_none(self.old_format)}' to '{_or_none(self.new_format)}'"


class NullableChanged(SchemaRule):
    NAME = "NullableChanged"
    SEVERITY: ClassVar[Severity] = "Warning"
    SUMMARY = "nullability flipped (Breaking when null is no longer allowed)"

    old_nullable: bool
    new_nullable: bool

    @property
    def severity(self) -> Severity:
        if self.old_nullable and not self.new_nullable:
            return "Breaking"
        if not self.old_nullable and self.new_nullable:
            return "Warning"
        return "Change"

    @property
    def description(self) -> str:
        old = str(self.old_nullable).lower()
        new = str(self.new_nullable).lower()
        return f"Nullable changed from {old} to {new}"


class DescriptionChanged(SchemaRule):
    NAME = "DescriptionChanged"
    SEVERITY: ClassVar[Severity] = "Change"
    SUMMARY = "documentation text changed"

    old_description: str | None = None
    new_description: str | None = None

    @property
    def description(self) -> str:
        return (
            f"Description changed from '{_or_none(self.old_description)}' "
            f"to '{_or_none(self.new_description)}'"
        )


class ArrayItemsChanged(SchemaRule):
    NAME = "ArrayItemsChanged"
    SEVERITY: ClassVar[Severity] = "Warning"
    SUMMARY = "array items declaration appeared or disappeared"

    change: str

    @property
    def description(self) -> str:
        return f"Array items changed: {self.change}"


SCHEMA_RULES: tuple[type[SchemaRule], ...] = (
    SchemaAdded,
    SchemaRemoved,
    SchemaUnresolved,
    TypeChanged,
    PropertyAdded,
    PropertyRemoved,
    RequiredPropertyAdded,
    RequiredPropertyRemoved,
    EnumValuesAdded,
    EnumValuesRemoved,
    FormatChanged,
    NullableChanged,
    DescriptionChanged,
    ArrayItemsChanged,
)
