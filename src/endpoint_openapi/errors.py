"""Exceptions raised by endpoint-openapi."""


class SchemaTranslationError(ValueError):
    """A schema cannot be rendered as an embeddable OpenAPI 3.0 schema."""


class BuilderError(RuntimeError):
    """The document builder was used incorrectly."""


class LoaderError(ValueError):
    """An endpoint target reference could not be resolved."""
