"""
OpenAPI document records using Pydantic v2.

Only the parts of a document the comparison engine reads are modelled:
``components.schemas`` and the operations under ``paths`` (parameters, request
bodies, responses and the schemas of their content). Everything else is ignored
on load.
"""

from __future__ import annotations

from typing import Annotated, Any, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, field_validator

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


class SchemaRef(BaseModel):
    """Pointer to another named schema of the same document."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)
    ref: str = Field(alias="$ref")


class SchemaNode(BaseModel):
    """Concrete type description: type-set, properties, constraints."""

    model_config = ConfigDict(extra="ignore", frozen=True)
    type: list[str] = Field(default_factory=list)
    properties: dict[str, SchemaOrRef] = Field(default_factory=dict)
    required: list[str] = Field(default_factory=list)
    enum: list[Any] | None = None
    format: str | None = None
    description: str | None = None
    nullable: bool = False
    items: SchemaOrRef | None = None

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type_set(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        # anything else that is not a list is left for pydantic to reject
        return v

    @field_validator("nullable", mode="before")
    @classmethod
    def _coerce_nullable(cls, v):
        return False if v is None else v

    @property
    def type_set(self) -> frozenset[str]:
        """Declared types without ``null``; nullability is tracked separately."""
        return frozenset(t for t in self.type if t != "null")

    @property
    def is_nullable(self) -> bool:
        # 3.0 uses the flag, 3.1 puts "null" in the type-set
        return self.nullable or "null" in self.type

    @property
    def is_array(self) -> bool:
        return "array" in self.type_set


def _schema_kind(value: Any) -> str:
    if isinstance(value, SchemaRef):
        return "ref"
    if isinstance(value, dict) and ("$ref" in value or ("ref" in value and len(value) == 1)):
        return "ref"
    return "node"


SchemaOrRef = Annotated[
    Union[Annotated[SchemaRef, Tag("ref")], Annotated[SchemaNode, Tag("node")]],
    Discriminator(_schema_kind),
]

# name -> root node, in document order
SchemaTable = dict[str, SchemaOrRef]


class Components(BaseModel):
    model_config = ConfigDict(extra="ignore")
    schemas: dict[str, SchemaOrRef] = Field(default_factory=dict)


class Parameter(BaseModel):
    """Operation parameter, keyed by ``(name, in)``."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)
    name: str
    location: str = Field(alias="in")
    required: bool = False
    description: str | None = None

    @property
    def key(self) -> tuple[str, str]:
        return (self.name, self.location)


class MediaType(BaseModel):
    """One ``content`` entry; ``schema`` is stored as ``media_schema``."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)
    media_schema: SchemaOrRef | None = Field(default=None, alias="schema")


def _coerce_content(v):
    if v is None:
        return {}
    if not isinstance(v, dict):
        return v
    # `application/json:` with nothing under it
    return {k: {} if val is None else val for k, val in v.items()}


class RequestBody(BaseModel):
    model_config = ConfigDict(extra="ignore")
    required: bool = False
    description: str | None = None
    content: dict[str, MediaType] = Field(default_factory=dict)

    @field_validator("content", mode="before")
    @classmethod
    def _empty_content(cls, v):
        return _coerce_content(v)


class Response(BaseModel):
    """Response object; a ``$ref`` to components.responses loads as an empty one."""

    model_config = ConfigDict(extra="ignore")
    description: str | None = None
    content: dict[str, MediaType] = Field(default_factory=dict)

    @field_validator("content", mode="before")
    @classmethod
    def _empty_content(cls, v):
        return _coerce_content(v)


class Operation(BaseModel):
    """A single HTTP method on a path."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)
    summary: str | None = None
    description: str | None = None
    operation_id: str | None = Field(default=None, alias="operationId")
    parameters: list[Parameter] = Field(default_factory=list)
    request_body: RequestBody | None = Field(default=None, alias="requestBody")
    responses: dict[str, Response] = Field(default_factory=dict)

    @field_validator("parameters", mode="before")
    @classmethod
    def _drop_parameter_refs(cls, v):
        # parameter $refs point into components.parameters, which is not modelled
        if v is None:
            return []
        if not isinstance(v, list):
            return v
        return [p for p in v if not (isinstance(p, dict) and "$ref" in p)]

    @field_validator("responses", mode="before")
    @classmethod
    def _coerce_status_keys(cls, v):
        if v is None:
            return {}
        if not isinstance(v, dict):
            return v
        # YAML loads bare 200 as an int; a bare status key loads as None
        return {str(k): {} if val is None else val for k, val in v.items()}


class PathItem(BaseModel):
    model_config = ConfigDict(extra="ignore")
    get: Operation | None = None
    put: Operation | None = None
    post: Operation | None = None
    delete: Operation | None = None
    options: Operation | None = None
    head: Operation | None = None
    patch: Operation | None = None
    trace: Operation | None = None

    def operation(self, method: str) -> Operation | None:
        return getattr(self, method, None)


class OpenApiDocument(BaseModel):
    """Parsed OpenAPI document (3.0 or 3.1)."""

    model_config = ConfigDict(extra="ignore")
    openapi: str | None = None
    info: dict[str, Any] = Field(default_factory=dict)
    paths: dict[str, PathItem] = Field(default_factory=dict)
    components: Components = Field(default_factory=Components)

    @field_validator("paths", "info", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return {} if v is None else v

    @field_validator("components", mode="before")
    @classmethod
    def _none_to_components(cls, v):
        return {} if v is None else v

    @property
    def schemas(self) -> SchemaTable:
        return self.components.schemas


SchemaNode.model_rebuild()
for _model in (Components, MediaType, RequestBody, Response, Operation, PathItem, OpenApiDocument):
    _model.model_rebuild()
