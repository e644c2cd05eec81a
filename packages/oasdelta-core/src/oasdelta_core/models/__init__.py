from .openapi import OpenApiDocument, SchemaNode, SchemaRef
from .policy import DiffPolicy
from .report import DiffReport, MatchRecord, ViolationRecord
from .severity import Category, Severity

__all__ = [
    "Category",
    "DiffPolicy",
    "DiffReport",
    "MatchRecord",
    "OpenApiDocument",
    "SchemaNode",
    "SchemaRef",
    "Severity",
    "ViolationRecord",
]
