from .base import BaseRule, RouteRule, SchemaRule
from .route import (
    ROUTE_RULES,
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
    SchemaUseRule,
)
from .schema import (
    SCHEMA_RULES,
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
)

ALL_RULES: tuple[type[BaseRule], ...] = SCHEMA_RULES + ROUTE_RULES

__all__ = [
    "ALL_RULES",
    "ArrayItemsChanged",
    "BaseRule",
    "DescriptionChanged",
    "EnumValuesAdded",
    "EnumValuesRemoved",
    "FormatChanged",
    "NullableChanged",
    "ParameterRemoved",
    "PropertyAdded",
    "PropertyRemoved",
    "ROUTE_RULES",
    "RequestBodyBecameRequired",
    "RequestSchemaChanged",
    "RequestSchemaViolation",
    "RequiredParameterAdded",
    "RequiredPropertyAdded",
    "RequiredPropertyRemoved",
    "ResponseSchemaChanged",
    "ResponseSchemaViolation",
    "ResponseStatusAdded",
    "ResponseStatusRemoved",
    "RouteAdded",
    "RouteDescriptionChanged",
    "RouteRemoved",
    "RouteRule",
    "RouteSummaryChanged",
    "SCHEMA_RULES",
    "SchemaAdded",
    "SchemaRemoved",
    "SchemaRule",
    "SchemaUseRule",
    "SchemaUnresolved",
    "TypeChanged",
]
