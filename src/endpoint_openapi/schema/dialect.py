"""JSON Schema export in the OpenAPI 3.0 dialect.

pydantic emits JSON Schema draft 2020-12. OpenAPI 3.0 uses an older subset
with a few differences, handled by OpenApi3JsonSchema:

- nullable values use ``nullable: true`` instead of a ``null`` type
- exclusive bounds are booleans next to ``minimum`` / ``maximum``
- single literals are ``enum`` (no ``const``)
- objects reject unknown keys (``additionalProperties: false``) unless the
  model allows extra fields
- no titles; ``$defs`` references are inlined so the schema can be
  embedded anywhere in a document
"""

from typing import Any

from pydantic import TypeAdapter
from pydantic.json_schema import GenerateJsonSchema, JsonSchemaValue
from pydantic_core import core_schema

from endpoint_openapi.errors import SchemaTranslationError

DEFS_REF_PREFIX = "#/$defs/"


class OpenApi3JsonSchema(GenerateJsonSchema):
    """pydantic JSON schema generator targeting OpenAPI 3.0."""

    def nullable_schema(self, schema: core_schema.NullableSchema) -> JsonSchemaValue:
        inner = self.generate_inner(schema["schema"])
        if "$ref" in inner:
            return {"allOf": [inner], "nullable": True}
        return {**inner, "nullable": True}

    def none_schema(self, schema: core_schema.NoneSchema) -> JsonSchemaValue:
        return {"enum": ["null"], "nullable": True}

    def int_schema(self, schema: core_schema.IntSchema) -> JsonSchemaValue:
        return _boolean_exclusive_bounds(super().int_schema(schema))

    def float_schema(self, schema: core_schema.FloatSchema) -> JsonSchemaValue:
        return _boolean_exclusive_bounds(super().float_schema(schema))

    def decimal_schema(self, schema: core_schema.DecimalSchema) -> JsonSchemaValue:
        return _boolean_exclusive_bounds(super().decimal_schema(schema))

    def literal_schema(self, schema: core_schema.LiteralSchema) -> JsonSchemaValue:
        json_schema = super().literal_schema(schema)
        if "const" in json_schema:
            json_schema["enum"] = [json_schema.pop("const")]
        return json_schema

    def model_schema(self, schema: core_schema.ModelSchema) -> JsonSchemaValue:
        return _closed_object(super().model_schema(schema))

    def typed_dict_schema(self, schema: core_schema.TypedDictSchema) -> JsonSchemaValue:
        return _closed_object(super().typed_dict_schema(schema))

    def dataclass_schema(self, schema: core_schema.DataclassSchema) -> JsonSchemaValue:
        return _closed_object(super().dataclass_schema(schema))

    def field_title_should_be_set(self, schema) -> bool:
        return False


def annotation_json_schema(annotation: Any) -> dict[str, Any]:
    """Render a type annotation as an embeddable OpenAPI 3.0 schema."""
    json_schema = TypeAdapter(annotation).json_schema(schema_generator=OpenApi3JsonSchema)
    definitions = json_schema.pop("$defs", {})
    return _inline(json_schema, definitions, ())


def to_openapi_schema(node) -> dict[str, Any]:
    """Render a SchemaNode as an OpenAPI 3.0 schema object."""
    return node.to_json_schema()


def _boolean_exclusive_bounds(json_schema: JsonSchemaValue) -> JsonSchemaValue:
    for bound, exclusive in (("minimum", "exclusiveMinimum"), ("maximum", "exclusiveMaximum")):
        value = json_schema.get(exclusive)
        if value is not None and not isinstance(value, bool):
            json_schema[exclusive] = True
            json_schema[bound] = value
    return json_schema


def _closed_object(json_schema: JsonSchemaValue) -> JsonSchemaValue:
    json_schema.pop("title", None)
    if json_schema.get("type") == "object":
        json_schema.setdefault("additionalProperties", False)
    return json_schema


def _inline(value: Any, definitions: dict[str, Any], trail: tuple[str, ...]) -> Any:
    if isinstance(value, list):
        return [_inline(item, definitions, trail) for item in value]
    if not isinstance(value, dict):
        return value

    ref = value.get("$ref")
    if isinstance(ref, str) and ref.startswith(DEFS_REF_PREFIX):
        name = ref[len(DEFS_REF_PREFIX):]
        if name in trail:
            raise SchemaTranslationError(
                f"Recursive schema {name!r} cannot be inlined in an OpenAPI 3.0 document"
            )
        resolved = _inline(definitions[name], definitions, trail + (name,))
        siblings = {k: _inline(v, definitions, trail) for k, v in value.items() if k != "$ref"}
        return {**resolved, **siblings}

    return {k: _inline(v, definitions, trail) for k, v in value.items()}
