"""Schema nodes: the type descriptions endpoint definitions are declared with.

A node wraps a Python type annotation understood by pydantic and exposes
the capability set the converter relies on:

- ``is_optional()`` / ``unwrap_optional()`` -- may the value be omitted, and
  the node beneath one layer of optionality
- ``is_array()`` -- does the node describe a list, looking through wrappers
- ``description`` / ``describe()`` -- attached human readable text
- ``to_json_schema()`` -- export as an OpenAPI 3.0 schema object

Nodes are immutable: ``optional()``, ``default()`` and ``describe()`` return
new nodes.

Example::

    limit = schema(PositiveInt).default(10).describe("Page size")
    offset = schema(int).optional()
"""

import collections.abc
import copy
import types
import typing
from abc import ABC, abstractmethod
from typing import Annotated, Any, Union

from pydantic_core import to_jsonable_python

from endpoint_openapi.schema.dialect import annotation_json_schema

ARRAY_TYPES = (
    list,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
)


class SchemaNode(ABC):
    """Abstract type description consumed by the converter."""

    description: str | None = None

    @abstractmethod
    def is_optional(self) -> bool:
        """Whether the value may be omitted."""

    @abstractmethod
    def unwrap_optional(self) -> "SchemaNode":
        """Return the node beneath one layer of optionality."""

    @abstractmethod
    def is_array(self) -> bool:
        """Whether the node describes an array, looking through wrappers."""

    @abstractmethod
    def _json_schema(self) -> dict[str, Any]:
        pass

    def is_optional_wrapper(self) -> bool:
        return False

    def to_json_schema(self) -> dict[str, Any]:
        """Export the node as an OpenAPI 3.0 schema object."""
        json_schema = self._json_schema()
        if self.description is not None:
            json_schema["description"] = self.description
        return json_schema

    def describe(self, description: str) -> "SchemaNode":
        node = copy.copy(self)
        node.description = description
        return node

    def optional(self) -> "OptionalNode":
        return OptionalNode(self)

    def default(self, value: Any) -> "DefaultNode":
        return DefaultNode(self, value)


class TypeNode(SchemaNode):
    """A required value described by a type annotation."""

    def __init__(self, annotation: Any, description: str | None = None):
        self.annotation = annotation
        self.description = description

    def is_optional(self) -> bool:
        return False

    def unwrap_optional(self) -> SchemaNode:
        return self

    def is_array(self) -> bool:
        return _is_array_annotation(self.annotation)

    def _json_schema(self) -> dict[str, Any]:
        return annotation_json_schema(self.annotation)

    def __repr__(self) -> str:
        return f"TypeNode({self.annotation!r})"


class OptionalNode(SchemaNode):
    """Marks the inner node as optional: the value may be omitted."""

    def __init__(self, inner: SchemaNode, description: str | None = None):
        self.inner = inner
        self.description = description

    def is_optional(self) -> bool:
        return True

    def is_optional_wrapper(self) -> bool:
        return True

    def unwrap_optional(self) -> SchemaNode:
        return self.inner

    def is_array(self) -> bool:
        return self.inner.is_array()

    def _json_schema(self) -> dict[str, Any]:
        return self.inner.to_json_schema()

    def __repr__(self) -> str:
        return f"OptionalNode({self.inner!r})"


class DefaultNode(SchemaNode):
    """Gives the inner node a default value.

    A defaulted value may be omitted, so the node reports itself optional,
    but it is not an optional wrapper: unwrapping returns the node itself.
    """

    def __init__(self, inner: SchemaNode, value: Any, description: str | None = None):
        self.inner = inner
        self.value = value
        self.description = description

    def is_optional(self) -> bool:
        return True

    def unwrap_optional(self) -> SchemaNode:
        return self

    def is_array(self) -> bool:
        return self.inner.is_array()

    def _json_schema(self) -> dict[str, Any]:
        json_schema = self.inner.to_json_schema()
        json_schema["default"] = to_jsonable_python(self.value)
        return json_schema

    def __repr__(self) -> str:
        return f"DefaultNode({self.inner!r}, {self.value!r})"


def schema(annotation: Any, description: str | None = None) -> TypeNode:
    """Create a node from a type annotation."""
    return TypeNode(annotation, description=description)


def _is_array_annotation(annotation: Any) -> bool:
    origin = typing.get_origin(annotation)
    if origin is Annotated:
        return _is_array_annotation(typing.get_args(annotation)[0])
    if origin is Union or origin is types.UnionType:
        # X | None is still an X
        members = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        return len(members) == 1 and _is_array_annotation(members[0])
    return annotation in ARRAY_TYPES or origin in ARRAY_TYPES
