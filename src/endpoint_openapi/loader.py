"""Resolve ``module:attribute`` references to endpoint definitions or builders."""

import importlib
import logging
import operator
import sys
from pathlib import Path

from pydantic import ValidationError

from endpoint_openapi.converter.document import OpenApiBuilder, coerce_endpoints
from endpoint_openapi.errors import LoaderError
from endpoint_openapi.models import EndpointDefinition

logger = logging.getLogger(__name__)


def load_target(reference: str, app_dir: Path | None = None) -> list[EndpointDefinition] | OpenApiBuilder:
    """Import ``package.module:attribute`` and return what it names.

    The attribute may be a list of endpoint definitions (or dicts), an
    OpenApiBuilder, or a callable returning either one.
    """
    module_name, _, attribute = reference.partition(":")
    if not module_name or not attribute:
        raise LoaderError(f"Invalid reference {reference!r}, expected 'module:attribute'")

    if app_dir is not None:
        app_path = str(app_dir.resolve())
        if app_path not in sys.path:
            sys.path.insert(0, app_path)

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise LoaderError(f"Could not import module {module_name!r}: {e}") from e

    try:
        target = operator.attrgetter(attribute)(module)
    except AttributeError as e:
        raise LoaderError(f"Module {module_name!r} has no attribute {attribute!r}") from e

    if callable(target) and not isinstance(target, OpenApiBuilder):
        logger.debug("Calling factory %s", reference)
        target = target()

    if isinstance(target, OpenApiBuilder):
        return target
    if isinstance(target, (list, tuple)):
        try:
            return coerce_endpoints(target)
        except ValidationError as e:
            raise LoaderError(f"Invalid endpoint definitions in {reference!r}:\n{e}") from e

    raise LoaderError(
        f"{reference!r} is a {type(target).__name__}, expected a list of endpoints or an OpenApiBuilder"
    )
