"""Parameter resolution: endpoint parameters to OpenAPI parameter objects."""

import logging
from typing import Any

from endpoint_openapi.converter.objects import compact, described, json_content
from endpoint_openapi.converter.paths import path_param_names
from endpoint_openapi.models import EndpointDefinition, ParameterSpec
from endpoint_openapi.schema.dialect import to_openapi_schema

logger = logging.getLogger(__name__)

EXCLUDED_PARAM_TYPES = ("Body", "Path")


def find_path_param(endpoint: EndpointDefinition, name: str) -> ParameterSpec | None:
    for param in endpoint.parameters:
        if param.type == "Path" and param.name == name:
            return param
    return None


def find_body_param(endpoint: EndpointDefinition) -> ParameterSpec | None:
    for param in endpoint.parameters:
        if param.type == "Body":
            return param
    return None


def resolve_parameters(endpoint: EndpointDefinition) -> list[dict[str, Any]]:
    """Build the parameter list: path placeholders first, then query and headers."""
    parameters = [_path_parameter(endpoint, name) for name in path_param_names(endpoint.path)]

    for param in endpoint.parameters:
        if param.type in EXCLUDED_PARAM_TYPES:
            continue
        parameters.append(_query_or_header_parameter(param))

    return parameters


def resolve_request_body(endpoint: EndpointDefinition) -> dict[str, Any] | None:
    """Build the request body from the first Body parameter, if any."""
    body = find_body_param(endpoint)
    if body is None:
        return None
    return compact({
        "description": described(body.description, body.schema_),
        "content": json_content(body.schema_),
    })


def _path_parameter(endpoint: EndpointDefinition, name: str) -> dict[str, Any]:
    param = find_path_param(endpoint, name)
    if param is None:
        logger.debug("%s %s: undeclared path parameter %r rendered as string", endpoint.method, endpoint.path, name)
        return {
            "name": name,
            "in": "path",
            "schema": {"type": "string"},
            "required": True,
        }
    # path parameters are always required
    return compact({
        "name": name,
        "description": described(param.description, param.schema_),
        "in": "path",
        "schema": to_openapi_schema(param.schema_),
        "required": True,
    })


def _query_or_header_parameter(param: ParameterSpec) -> dict[str, Any]:
    node = param.schema_
    required = not node.is_optional()
    rendered = node if required or not node.is_optional_wrapper() else node.unwrap_optional()
    name = f"{param.name}[]" if param.type == "Query" and node.is_array() else param.name

    return compact({
        "name": name,
        "in": param.type.lower(),
        "schema": to_openapi_schema(rendered),
        "description": described(param.description, node),
        "required": required,
    })
