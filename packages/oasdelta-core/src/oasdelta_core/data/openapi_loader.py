# oasdelta_core/data/openapi_loader.py
from pathlib import Path

from oasdelta_core.data.loader import load_document_typed
from oasdelta_core.models.openapi import OpenApiDocument, SchemaTable


def load_openapi_document(path: str | Path) -> OpenApiDocument:
    """Typed OpenAPI loader; YAML and JSON documents are both accepted."""
    return load_document_typed(Path(path), model=OpenApiDocument)


def schema_table(document: OpenApiDocument) -> SchemaTable:
    return document.schemas
