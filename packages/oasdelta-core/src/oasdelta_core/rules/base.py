from abc import ABC, abstractmethod
from typing import ClassVar

from pydantic import BaseModel, ConfigDict

from oasdelta_core.models.severity import Category, Severity


class BaseRule(BaseModel, ABC):
    """One detected difference kind.

    Subclasses carry the data that describes a single occurrence and render
    themselves; the matchers only decide when to construct them.
    """

    model_config = ConfigDict(frozen=True)

    NAME: ClassVar[str] = ""
    CATEGORY: ClassVar[Category] = "Schema"
    # fixed severity; kinds whose severity depends on their data override ``severity``
    SEVERITY: ClassVar[Severity] = "Change"
    SUMMARY: ClassVar[str] = ""

    @property
    def name(self) -> str:
        return self.NAME

    @property
    def category(self) -> Category:
        return self.CATEGORY

    @property
    def severity(self) -> Severity:
        return self.SEVERITY

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable account of this occurrence."""
        ...

    @property
    @abstractmethod
    def context(self) -> str:
        """Where in the document the difference was found."""
        ...


class SchemaRule(BaseRule):
    """Rule anchored at a schema name and a dotted property path."""

    CATEGORY: ClassVar[Category] = "Schema"

    schema_name: str
    property_path: str = ""

    @property
    def context(self) -> str:
        if not self.property_path:
            return f"schema: {self.schema_name}"
        return f"schema: {self.schema_name}, property: {self.property_path}"


class RouteRule(BaseRule):
    """Rule anchored at an operation (``METHOD /path``)."""

    CATEGORY: ClassVar[Category] = "Endpoint"

    path: str
    method: str

    @property
    def route(self) -> str:
        return f"{self.method.upper()} {self.path}"

    @property
    def context(self) -> str:
        return f"route: {self.route}"
