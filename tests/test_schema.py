from enum import Enum
from typing import Annotated, Literal

import pytest
from pydantic import BaseModel, ConfigDict, Field, PositiveInt

from endpoint_openapi.errors import SchemaTranslationError
from endpoint_openapi.schema.dialect import annotation_json_schema, to_openapi_schema
from endpoint_openapi.schema.node import DefaultNode, OptionalNode, TypeNode, schema


class Address(BaseModel):
    city: str


class Person(BaseModel):
    name: str
    address: Address
    nickname: str | None = None


class Loose(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str


class Tree(BaseModel):
    children: list["Tree"]


class Color(str, Enum):
    RED = "red"
    BLUE = "blue"


class TestSchemaNode:
    def test_type_node_is_required(self):
        node = schema(int)
        assert isinstance(node, TypeNode)
        assert node.is_optional() is False
        assert node.is_optional_wrapper() is False
        assert node.unwrap_optional() is node

    def test_optional_wraps_one_layer(self):
        inner = schema(int)
        node = inner.optional()
        assert isinstance(node, OptionalNode)
        assert node.is_optional() is True
        assert node.is_optional_wrapper() is True
        assert node.unwrap_optional() is inner

    def test_default_is_optional_but_not_a_wrapper(self):
        node = schema(int).default(10)
        assert isinstance(node, DefaultNode)
        assert node.is_optional() is True
        assert node.is_optional_wrapper() is False
        assert node.unwrap_optional() is node

    def test_describe_returns_new_node(self):
        node = schema(str)
        described = node.describe("A name")
        assert described.description == "A name"
        assert node.description is None

    @pytest.mark.parametrize("annotation", [list[str], set[int], Annotated[list[int], Field(min_length=1)], list[str] | None])
    def test_array_annotations(self, annotation):
        assert schema(annotation).is_array() is True

    @pytest.mark.parametrize("annotation", [str, int, dict[str, int], Person, tuple[int, int]])
    def test_non_array_annotations(self, annotation):
        assert schema(annotation).is_array() is False

    def test_array_seen_through_wrappers(self):
        assert schema(list[str]).optional().is_array() is True
        assert schema(list[str]).default([]).is_array() is True


class TestOpenApi3Dialect:
    def test_primitives(self):
        assert annotation_json_schema(str) == {"type": "string"}
        assert annotation_json_schema(int) == {"type": "integer"}
        assert annotation_json_schema(bool) == {"type": "boolean"}

    def test_array(self):
        assert annotation_json_schema(list[str]) == {"type": "array", "items": {"type": "string"}}

    def test_exclusive_minimum_is_boolean(self):
        assert annotation_json_schema(PositiveInt) == {
            "type": "integer",
            "exclusiveMinimum": True,
            "minimum": 0,
        }

    def test_exclusive_maximum_is_boolean(self):
        assert annotation_json_schema(Annotated[float, Field(lt=1)]) == {
            "type": "number",
            "exclusiveMaximum": True,
            "maximum": 1,
        }

    def test_inclusive_bounds_untouched(self):
        assert annotation_json_schema(Annotated[int, Field(ge=1, le=5)]) == {
            "type": "integer",
            "minimum": 1,
            "maximum": 5,
        }

    def test_nullable(self):
        assert annotation_json_schema(int | None) == {"type": "integer", "nullable": True}

    def test_single_literal_is_enum(self):
        json_schema = annotation_json_schema(Literal["No users found"])
        assert json_schema["enum"] == ["No users found"]
        assert "const" not in json_schema

    def test_model_is_closed_and_inlined(self):
        json_schema = annotation_json_schema(Person)
        assert json_schema["type"] == "object"
        assert json_schema["additionalProperties"] is False
        assert json_schema["required"] == ["name", "address"]
        assert json_schema["properties"]["address"] == {
            "type": "object",
            "properties": {"city": {"type": "string"}},
            "required": ["city"],
            "additionalProperties": False,
        }
        assert "$defs" not in json_schema
        assert "title" not in json_schema

    def test_model_nullable_field(self):
        nickname = annotation_json_schema(Person)["properties"]["nickname"]
        assert nickname["nullable"] is True
        assert nickname["type"] == "string"

    def test_model_allowing_extra_keys(self):
        assert annotation_json_schema(Loose)["additionalProperties"] is True

    def test_list_of_models_inlined(self):
        json_schema = annotation_json_schema(list[Address])
        assert json_schema["items"]["properties"] == {"city": {"type": "string"}}
        assert "$defs" not in json_schema

    def test_enum_inlined(self):
        json_schema = annotation_json_schema(Color)
        assert json_schema["enum"] == ["red", "blue"]
        assert json_schema["type"] == "string"

    def test_recursive_model_rejected(self):
        with pytest.raises(SchemaTranslationError, match="Tree"):
            annotation_json_schema(Tree)


class TestNodeExport:
    def test_description_attached(self):
        assert to_openapi_schema(schema(str).describe("A name")) == {"type": "string", "description": "A name"}

    def test_optional_exports_inner(self):
        assert to_openapi_schema(schema(int).optional()) == {"type": "integer"}

    def test_default_value_exported(self):
        assert to_openapi_schema(schema(PositiveInt).default(10)) == {
            "type": "integer",
            "exclusiveMinimum": True,
            "minimum": 0,
            "default": 10,
        }

    def test_export_is_fresh_each_call(self):
        node = schema(Person)
        first = to_openapi_schema(node)
        first["properties"].clear()
        assert to_openapi_schema(node)["properties"] != {}
