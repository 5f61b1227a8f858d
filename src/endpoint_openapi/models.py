"""Data models for declarative endpoint definitions.

Endpoint definitions are the input of the converter: each one describes a
single API operation with typed parameters, a typed response and typed
error responses. Schemas are carried as SchemaNode objects.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from endpoint_openapi.schema.node import SchemaNode

HttpMethod = Literal["get", "post", "put", "patch", "delete", "head", "options"]
ParameterType = Literal["Path", "Query", "Header", "Body"]


class ParameterSpec(BaseModel):
    """A single declared parameter (path, query, header, or request body)."""

    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True, frozen=True)

    name: str
    type: ParameterType
    description: str | None = None
    schema_: SchemaNode = Field(alias="schema")


class ErrorSpec(BaseModel):
    """A declared error response, keyed by status code or "default"."""

    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True, frozen=True)

    status: int | Literal["default"]
    description: str | None = None
    schema_: SchemaNode = Field(alias="schema")


class EndpointDefinition(BaseModel):
    """A single API endpoint with all its metadata."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    method: HttpMethod
    path: str  # /users/:id?filter=:filter
    alias: str  # rendered as operationId
    description: str | None = None
    parameters: list[ParameterSpec] = []
    response: SchemaNode
    errors: list[ErrorSpec] = []
    status: int = 200

    @field_validator("method", mode="before")
    @classmethod
    def _lower_method(cls, value):
        if isinstance(value, str):
            return value.lower()
        return value


class EndpointGroup(BaseModel):
    """Endpoints sharing the same security: public when scheme is None."""

    model_config = ConfigDict(frozen=True)

    endpoints: list[EndpointDefinition]
    scheme: str | None = None
    security_requirement: list[str] | None = None


class Info(BaseModel):
    """OpenAPI info object. Extra OpenAPI keys (contact, license...) are kept."""

    model_config = ConfigDict(extra="allow")

    title: str
    version: str
    description: str | None = None


class Server(BaseModel):
    """OpenAPI server object."""

    model_config = ConfigDict(extra="allow")

    url: str
    description: str | None = None
