"""Response aggregation: success response and declared errors keyed by status."""

import logging
from typing import Any

from endpoint_openapi.converter.objects import json_content
from endpoint_openapi.models import EndpointDefinition

logger = logging.getLogger(__name__)

SUCCESS_DESCRIPTION = "Success"
DEFAULT_ERROR_DESCRIPTION = "Error"


def build_responses(endpoint: EndpointDefinition) -> dict[str, Any]:
    """Build the responses map.

    The success response is keyed by the endpoint status. Errors follow in
    declaration order; a later entry replaces an earlier one with the same
    key, the success response included.
    """
    responses: dict[str, Any] = {
        str(endpoint.status): {
            "description": SUCCESS_DESCRIPTION,
            "content": json_content(endpoint.response),
        }
    }

    for error in endpoint.errors:
        key = str(error.status)
        if key in responses:
            logger.debug("%s %s: response %s replaced by declared error", endpoint.method, endpoint.path, key)

        description = error.description
        if description is None:
            description = error.schema_.description or DEFAULT_ERROR_DESCRIPTION

        responses[key] = {
            "description": description,
            "content": json_content(error.schema_),
        }

    return responses
