"""Document assembly: endpoint groups to a complete OpenAPI 3.0 document.

Use ``convert`` for a single list of endpoints, optionally protected by one
security scheme. Use ``new_builder`` when several groups of endpoints are
protected by different schemes, or not at all::

    document = (
        new_builder({"title": "Users", "version": "1.0.0"})
        .add_security_scheme("bearer", security.bearer())
        .add_public_group(public_endpoints)
        .add_protected_group("bearer", admin_endpoints, ["admin"])
        .build()
    )
"""

import copy
import logging
from collections.abc import Callable, Iterable
from typing import Any

from endpoint_openapi.converter.objects import compact
from endpoint_openapi.converter.parameters import resolve_parameters, resolve_request_body
from endpoint_openapi.converter.paths import tags_from_path, template_path
from endpoint_openapi.converter.responses import build_responses
from endpoint_openapi.errors import BuilderError
from endpoint_openapi.models import EndpointDefinition, EndpointGroup, Info, Server

logger = logging.getLogger(__name__)

OPENAPI_VERSION = "3.0.0"
DEFAULT_TITLE = "endpoint-openapi: add an info object to 'convert' options"
DEFAULT_VERSION = "1.0.0"
DEFAULT_SCHEME_NAME = "auth"

TagFn = Callable[[str], list[str] | None]


def coerce_endpoints(endpoints: Iterable[EndpointDefinition | dict]) -> list[EndpointDefinition]:
    """Validate plain dicts into EndpointDefinition records."""
    return [
        endpoint if isinstance(endpoint, EndpointDefinition) else EndpointDefinition.model_validate(endpoint)
        for endpoint in endpoints
    ]


def build_operation(endpoint: EndpointDefinition, group: EndpointGroup, tag_fn: TagFn) -> dict[str, Any]:
    """Assemble the OpenAPI operation object of one endpoint."""
    security = None
    if group.scheme:
        security = [{group.scheme: list(group.security_requirement or [])}]

    return compact({
        "operationId": endpoint.alias,
        "summary": endpoint.description,
        "description": endpoint.description,
        "tags": tag_fn(endpoint.path),
        "security": security,
        "requestBody": resolve_request_body(endpoint),
        "parameters": resolve_parameters(endpoint),
        "responses": build_responses(endpoint),
    })


def make_openapi(
    groups: Iterable[EndpointGroup],
    *,
    info: Info | dict | None = None,
    servers: Iterable[Server | dict] | None = None,
    security_schemes: dict[str, dict[str, Any]] | None = None,
    tag_fn: TagFn | None = None,
) -> dict[str, Any]:
    """Create an OpenAPI document from endpoint groups, in group then declaration order."""
    tag_fn = tag_fn or tags_from_path

    if info is None:
        info = Info(title=DEFAULT_TITLE, version=DEFAULT_VERSION)
    else:
        info = Info.model_validate(info)

    document: dict[str, Any] = {
        "openapi": OPENAPI_VERSION,
        "info": info.model_dump(exclude_none=True),
    }
    if servers is not None:
        document["servers"] = [Server.model_validate(server).model_dump(exclude_none=True) for server in servers]
    if security_schemes:
        document["components"] = {"securitySchemes": copy.deepcopy(security_schemes)}

    paths: dict[str, dict[str, Any]] = {}
    for group in groups:
        for endpoint in group.endpoints:
            path = template_path(endpoint.path)
            path_item = paths.setdefault(path, {})
            if endpoint.method in path_item:
                logger.warning("Duplicate endpoint %s %s: %r replaces %r",
                               endpoint.method, path, endpoint.alias, path_item[endpoint.method].get("operationId"))
            path_item[endpoint.method] = build_operation(endpoint, group, tag_fn)
            logger.debug("Added operation %s %s (%s)", endpoint.method, path, endpoint.alias)

    document["paths"] = paths
    return document


def convert(
    endpoints: Iterable[EndpointDefinition | dict],
    *,
    info: Info | dict | None = None,
    servers: Iterable[Server | dict] | None = None,
    security_scheme: dict[str, Any] | None = None,
    tag_fn: TagFn | None = None,
) -> dict[str, Any]:
    """Create an OpenAPI document from a single list of endpoints.

    When ``security_scheme`` is given it is registered as ``auth`` and every
    operation requires it; otherwise all operations are public.
    """
    group = EndpointGroup(
        endpoints=coerce_endpoints(endpoints),
        scheme=DEFAULT_SCHEME_NAME if security_scheme else None,
    )
    return make_openapi(
        [group],
        info=info,
        servers=servers,
        security_schemes={DEFAULT_SCHEME_NAME: security_scheme} if security_scheme else None,
        tag_fn=tag_fn,
    )


class OpenApiBuilder:
    """Fluent builder for documents mixing public and protected endpoint groups."""

    def __init__(self, info: Info | dict):
        self._info = Info.model_validate(info)
        self._groups: list[EndpointGroup] = []
        self._servers: list[Server] | None = None
        self._security_schemes: dict[str, dict[str, Any]] | None = None
        self._tag_fn: TagFn | None = None
        self._built = False

    def add_security_scheme(self, name: str, scheme: dict[str, Any]) -> "OpenApiBuilder":
        """Register a security scheme under ``name``."""
        if self._security_schemes is None:
            self._security_schemes = {}
        self._security_schemes[name] = scheme
        return self

    def add_public_group(self, endpoints: Iterable[EndpointDefinition | dict]) -> "OpenApiBuilder":
        """Add endpoints that require no authentication."""
        self._groups.append(EndpointGroup(endpoints=coerce_endpoints(endpoints)))
        return self

    def add_protected_group(
        self,
        scheme: str,
        endpoints: Iterable[EndpointDefinition | dict],
        security_requirement: list[str] | None = None,
    ) -> "OpenApiBuilder":
        """Add endpoints protected by the scheme registered as ``scheme``.

        ``security_requirement`` lists the scopes the endpoints need (oauth2
        scopes for example).
        """
        self._groups.append(EndpointGroup(
            endpoints=coerce_endpoints(endpoints),
            scheme=scheme,
            security_requirement=security_requirement,
        ))
        return self

    def add_server(self, server: Server | dict) -> "OpenApiBuilder":
        if self._servers is None:
            self._servers = []
        self._servers.append(Server.model_validate(server))
        return self

    def set_tag_fn(self, tag_fn: TagFn) -> "OpenApiBuilder":
        """Override how tags are derived from endpoint paths."""
        self._tag_fn = tag_fn
        return self

    def build(self) -> dict[str, Any]:
        """Assemble the document. A builder can only be built once."""
        if self._built:
            raise BuilderError("build() was already called on this builder")

        registered = self._security_schemes or {}
        for group in self._groups:
            if group.scheme and group.scheme not in registered:
                raise BuilderError(
                    f"Security scheme {group.scheme!r} is not registered; call add_security_scheme() first"
                )

        self._built = True
        return make_openapi(
            list(self._groups),
            info=self._info,
            servers=list(self._servers) if self._servers is not None else None,
            security_schemes=self._security_schemes,
            tag_fn=self._tag_fn,
        )


def new_builder(info: Info | dict) -> OpenApiBuilder:
    """Start building a document with the given info object."""
    return OpenApiBuilder(info)
