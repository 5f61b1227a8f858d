"""Security scheme objects for the components section of a document."""

from typing import Any, Literal

from endpoint_openapi.converter.objects import compact


def bearer(description: str | None = None) -> dict[str, Any]:
    """HTTP bearer authentication with JWT tokens."""
    return compact({
        "type": "http",
        "scheme": "bearer",
        "bearerFormat": "JWT",
        "description": description,
    })


def basic(description: str | None = None) -> dict[str, Any]:
    """HTTP basic authentication."""
    return compact({
        "type": "http",
        "scheme": "basic",
        "description": description,
    })


def api_key(
    name: str,
    location: Literal["query", "header", "cookie"],
    description: str | None = None,
) -> dict[str, Any]:
    """API key sent in a query parameter, header, or cookie named ``name``."""
    return compact({
        "type": "apiKey",
        "description": description,
        "name": name,
        "in": location,
    })


def oauth2(flows: dict[str, Any], description: str | None = None) -> dict[str, Any]:
    """OAuth2 with the given flows (implicit, password, clientCredentials, authorizationCode)."""
    return compact({
        "type": "oauth2",
        "description": description,
        "flows": flows,
    })
