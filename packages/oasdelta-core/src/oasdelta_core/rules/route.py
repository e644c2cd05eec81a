from typing import ClassVar

from oasdelta_core.models.severity import Category, Severity
from oasdelta_core.rules.base import RouteRule


class RouteAdded(RouteRule):
    NAME = "RouteAdded"
    SEVERITY: ClassVar[Severity] = "Change"
    SUMMARY = "operation only present in the current document"

    @property
    def description(self) -> str:
        return f"Route added: {self.route}"


class RouteRemoved(RouteRule):
    NAME = "RouteRemoved"
    SEVERITY: ClassVar[Severity] = "Breaking"
    SUMMARY = "operation only present in the base document"

    @property
    def description(self) -> str:
        return f"Route removed: {self.route}"


class RouteSummaryChanged(RouteRule):
    NAME = "RouteSummaryChanged"
    SEVERITY: ClassVar[Severity] = "Change"
    SUMMARY = "operation summary text changed"

    old_summary: str
    new_summary: str

    @property
    def description(self) -> str:
        return f"Summary changed from '{self.old_summary}' to '{self.new_summary}'"


class RouteDescriptionChanged(RouteRule):
    NAME = "RouteDescriptionChanged"
    SEVERITY: ClassVar[Severity] = "Change"
    SUMMARY = "operation description text changed"

    old_description: str
    new_description: str

    @property
    def description(self) -> str:
        return f"Description changed for {self.route}"


class ParameterRule(RouteRule):
    CATEGORY: ClassVar[Category] = "Parameter"

    parameter_name: str
    parameter_in: str

    @property
    def context(self) -> str:
        return f"route: {self.route}, parameter: {self.parameter_name} (in: {self.parameter_in})"


class RequiredParameterAdded(ParameterRule):
    NAME = "RequiredParameterAdded"
    SEVERITY: ClassVar[Severity] = "Breaking"
    SUMMARY = "new mandatory parameter"

    @property
    def description(self) -> str:
        return f"Required parameter added: {self.parameter_name} (in: {self.parameter_in})"


class ParameterRemoved(ParameterRule):
    NAME = "ParameterRemoved"
    SEVERITY: ClassVar[Severity] = "Breaking"
    SUMMARY = "parameter no longer accepted"

    @property
    def description(self) -> str:
        return f"Parameter removed: {self.parameter_name} (in: {self.parameter_in})"


class ResponseRule(RouteRule):
    CATEGORY: ClassVar[Category] = "Response"

    status_code: str

    @property
    def context(self) -> str:
        return f"route: {self.route}, status: {self.status_code}"


class ResponseStatusAdded(ResponseRule):
    NAME = "ResponseStatusAdded"
    SEVERITY: ClassVar[Severity] = "Change"
    SUMMARY = "operation documents a new response status"

    @property
    def description(self) -> str:
        return f"Response status added: {self.status_code}"


class ResponseStatusRemoved(ResponseRule):
    NAME = "ResponseStatusRemoved"
    SEVERITY: ClassVar[Severity] = "Breaking"
    SUMMARY = "operation no longer documents a response status"

    @property
    def description(self) -> str:
        return f"Response status removed: {self.status_code}"


class RequestBodyBecameRequired(RouteRule):
    NAME = "RequestBodyBecameRequired"
    CATEGORY: ClassVar[Category] = "RequestBody"
    SEVERITY: ClassVar[Severity] = "Breaking"
    SUMMARY = "request body is now mandatory"

    @property
    def description(self) -> str:
        return f"Request body became required: {self.route}"


class RequestSchemaChanged(RouteRule):
    NAME = "RequestSchemaChanged"
    CATEGORY: ClassVar[Category] = "RequestBody"
    SEVERITY: ClassVar[Severity] = "Breaking"
    SUMMARY = "request body content type now uses a different schema"

    content_type: str
    old_schema: str
    new_schema: str

    @property
    def description(self) -> str:
        return f"Request schema for {self.content_type} changed from '{self.old_schema}' to '{self.new_schema}'"

    @property
    def context(self) -> str:
        return f"route: {self.route}, content: {self.content_type}"


class ResponseSchemaChanged(ResponseRule):
    NAME = "ResponseSchemaChanged"
    SEVERITY: ClassVar[Severity] = "Breaking"
    SUMMARY = "response content type now uses a different schema"

    content_type: str
    old_schema: str
    new_schema: str

    @property
    def description(self) -> str:
        return (
            f"Response schema for status {self.status_code} ({self.content_type}) "
            f"changed from '{self.old_schema}' to '{self.new_schema}'"
        )


class SchemaUseRule(RouteRule):
    """A change inside a component schema, seen from a route that uses it.

    Severity is that of the schema change itself.
    """

    used_schema: str
    content_type: str
    schema_rule: str
    change_description: str
    change_context: str
    change_severity: Severity

    @property
    def severity(self) -> Severity:
        return self.change_severity


class RequestSchemaViolation(SchemaUseRule):
    NAME = "RequestSchemaViolation"
    CATEGORY: ClassVar[Category] = "RequestBody"
    SUMMARY = "schema used by the request body changed (takes the schema change's severity)"

    @property
    def description(self) -> str:
        return f"Request schema '{self.used_schema}' ({self.content_type}): {self.change_description}"

    @property
    def context(self) -> str:
        return f"route: {self.route}, {self.change_context}"


class ResponseSchemaViolation(SchemaUseRule):
    NAME = "ResponseSchemaViolation"
    CATEGORY: ClassVar[Category] = "Response"
    SUMMARY = "schema used by a response changed (takes the schema change's severity)"

    status_code: str

    @property
    def description(self) -> str:
        return (
            f"Response schema '{self.used_schema}' ({self.content_type}) "
            f"for status {self.status_code}: {self.change_description}"
        )

    @property
    def context(self) -> str:
        return f"route: {self.route}, status: {self.status_code}, {self.change_context}"


ROUTE_RULES: tuple[type[RouteRule], ...] = (
    RouteAdded,
    RouteRemoved,
    RouteSummaryChanged,
    RouteDescriptionChanged,
    RequiredParameterAdded,
    ParameterRemoved,
    ResponseStatusAdded,
    ResponseStatusRemoved,
    RequestBodyBecameRequired,
    RequestSchemaChanged,
    ResponseSchemaChanged,
    RequestSchemaViolation,
    ResponseSchemaViolation,
)
