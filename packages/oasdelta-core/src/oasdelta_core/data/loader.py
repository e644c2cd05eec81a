import json
from pathlib import Path
from typing import Any, overload

import yaml
from pydantic import TypeAdapter, ValidationError

JSON_SUFFIXES = frozenset({".json"})

# -------------------------------
# Raw document reader
# -------------------------------


def _parse_text(p: Path, text: str) -> Any:
    # .json goes through the JSON parser so its errors carry JSON line/column
    # positions; anything else is YAML, which also accepts JSON text
    if p.suffix.lower() in JSON_SUFFIXES:
        try:
            return json.loads(text) if text.strip() else None
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {p}: {e}") from e
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {p}: {e}") from e


def read_document(path: Path | str) -> dict[str, Any]:
    """Read a YAML or JSON file whose top level must be a mapping."""
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"File not found: {p}")

    try:
        text = p.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ValueError(f"Unable to decode UTF-8 in {p}: {e}") from e

    data = _parse_text(p, text)
    if data is None:
        raise ValueError(f"Empty document: {p}")
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top level of {p}, got {type(data).__name__}")

    return data


def _describe(e: ValidationError) -> str:
    """First error location and message, plus how many more there are."""
    first = e.errors()[0]
    where = ".".join(str(part) for part in first["loc"]) or "<root>"
    more = e.error_count() - 1
    suffix = f" (and {more} more)" if more else ""
    return f"{where}: {first['msg']}{suffix}"


# -------------------------------
# Public typed loader
# -------------------------------


@overload
def load_document_typed[T](path: Path | str, *, adapter: TypeAdapter[T]) -> T: ...


@overload
def load_document_typed[T](path: Path | str, *, model: type[T]) -> T: ...


def load_document_typed(
    path: Path | str,
    *,
    adapter: TypeAdapter | None = None,
    model: type | None = None,
):
    """Read a YAML/JSON document and validate it into a typed object using Pydantic v2.

    Exactly one of {adapter, model} must be supplied. Validation errors are
    re-raised as ``ValueError`` naming the file and the first failing location.

    Example:
        load_document_typed("api/v2.yaml", model=OpenApiDocument)
    """
    if (adapter is None) == (model is None):
        raise ValueError("Provide exactly one of 'adapter' or 'model'.")

    data = read_document(path)

    try:
        if adapter is not None:
            return adapter.validate_python(data)
        return TypeAdapter(model).validate_python(data)
    except ValidationError as e:
        raise ValueError(f"Invalid structure in {path}: {_describe(e)}") from e
