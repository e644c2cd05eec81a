from .loader import load_document_typed, read_document
from .openapi_loader import load_openapi_document, schema_table
from .policy import load_diff_policy

__all__ = [
    "load_diff_policy",
    "load_document_typed",
    "load_openapi_document",
    "read_document",
    "schema_table",
]
