"""Helpers shared by the converter stages to build OpenAPI objects."""

from typing import Any

from endpoint_openapi.schema.dialect import to_openapi_schema
from endpoint_openapi.schema.node import SchemaNode

CONTENT_TYPE_JSON = "application/json"


def compact(obj: dict[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is None; OpenAPI objects omit unset fields."""
    return {key: value for key, value in obj.items() if value is not None}


def json_content(node: SchemaNode) -> dict[str, Any]:
    """Build a content map carrying the node's schema as application/json."""
    return {CONTENT_TYPE_JSON: {"schema": to_openapi_schema(node)}}


def described(declared: str | None, node: SchemaNode) -> str | None:
    """Declared description, falling back to the one attached to the schema."""
    if declared is not None:
        return declared
    return node.description
