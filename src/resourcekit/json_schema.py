"""JSON Schema / OpenAPI schema generation."""

from __future__ import annotations

import copy
import re
from typing import TYPE_CHECKING, Any

from resourcekit.exceptions import DepthExceededError, UnsupportedTypeError
from resourcekit.field_selector import required_field_selector, schema_field_selector
from resourcekit.logging import get_resource_logger
from resourcekit.settings import get_settings
from resourcekit.typing.enums import ScalarKind
from resourcekit.typing.models import Selection
from resourcekit.typing.types import ArrayOf, Enum, NullableOf, ResourceRef, Scalar

if TYPE_CHECKING:
    from resourcekit.typing.models import Field, ResourceType
    from resourcekit.typing.protocol import ResourceLike
    from resourcekit.typing.types import TypeDef

JsonSchema = dict[str, Any]

_SCALAR_SCHEMAS: dict[ScalarKind, JsonSchema] = {
    ScalarKind.INTEGER: {"type": "integer"},
    ScalarKind.NUMBER: {"type": "number"},
    ScalarKind.STRING: {"type": "string"},
    ScalarKind.BOOLEAN: {"type": "boolean"},
    ScalarKind.DATE: {"type": "string", "format": "date"},
    ScalarKind.DATETIME: {"type": "string", "format": "date-time"},
}


def underscore(camel_cased_word: str) -> str:
    """Convert a CamelCase type name to snake_case, e.g. `ProductImage` -> `product_image`."""
    if not re.search(r"[A-Z-]|\.", camel_cased_word):
        return camel_cased_word
    word = camel_cased_word.replace(".", "/")
    word = re.sub(r"([A-Z\d]+)([A-Z][a-z])", r"\1_\2", word)
    word = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", word)
    return word.replace("-", "_").lower()


class JsonSchemaGenerator:
    """Recursive schema generator for one dialect.

    `openapi` switches nullable encoding to the OpenAPI `nullable` keyword. With `use_ref`,
    resources below the top level are emitted as reference stubs instead of being inlined.
    """

    def __init__(
        self,
        *,
        openapi: bool = False,
        use_ref: bool = False,
        depth: int = 0,
        max_depth: int | None = None,
    ) -> None:
        self.openapi = openapi
        self.use_ref = use_ref
        self.depth = depth
        self.max_depth = get_settings().max_depth if max_depth is None else max_depth

    def _descend(self) -> JsonSchemaGenerator:
        return JsonSchemaGenerator(
            openapi=self.openapi,
            use_ref=self.use_ref,
            depth=self.depth + 1,
            max_depth=self.max_depth,
        )

    def convert_type(
        self,
        type_: TypeDef,
        *,
        nullable: bool = False,
        selection: Selection | None = None,
    ) -> JsonSchema:
        """Build the schema fragment of a type.

        Args:
            type_ (TypeDef): Type to convert.
            nullable (bool): Union the result with null.
            selection (Selection | None): Selection applied when the type is a resource.

        Returns:
            JsonSchema: Schema fragment.
        """
        if isinstance(type_, NullableOf):
            return self.convert_type(type_.inner, nullable=True, selection=selection)
        schema = self._convert_real_type(type_, selection or Selection())
        return self._apply_nullable(schema) if nullable else schema

    def _convert_real_type(self, type_: TypeDef, selection: Selection) -> JsonSchema:
        if isinstance(type_, Scalar):
            return dict(_SCALAR_SCHEMAS[type_.kind])
        if isinstance(type_, Enum):
            schema = dict(_SCALAR_SCHEMAS[type_.kind])
            schema["enum"] = list(type_.values)
            return schema
        if isinstance(type_, ArrayOf):
            return {"type": "array", "items": self.convert_type(type_.item, selection=selection)}
        if isinstance(type_, ResourceRef):
            return self.resource_schema(type_.resource_type, selection)
        raise UnsupportedTypeError(type_=type_)

    def _apply_nullable(self, schema: JsonSchema) -> JsonSchema:
        if self.openapi:
            schema["nullable"] = True
            return schema
        json_type = schema.get("type")
        if json_type is None:
            return {"anyOf": [schema, {"type": "null"}]}
        if isinstance(json_type, list):
            if "null" not in json_type:
                schema["type"] = [*json_type, "null"]
            return schema
        schema["type"] = [json_type, "null"]
        return schema

    def field_schema(self, field: Field, selection: Selection | None = None) -> JsonSchema:
        """Build the schema fragment of a field, merged with its extra schema keywords.

        Args:
            field (Field): Field declaration.
            selection (Selection | None): Selection for the field when it holds a resource.

        Returns:
            JsonSchema: Schema fragment.
        """
        schema = self.convert_type(field.type, nullable=field.nullable, selection=selection)
        schema.update(copy.deepcopy(field.extra_options))
        return schema

    def reference_stub(self, resource_type: ResourceType) -> JsonSchema:
        """Pointer to a resource schema generated elsewhere, with an import hint."""
        return {"tsType": resource_type.title, "tsTypeImport": underscore(resource_type.title)}

    def resource_schema(self, resource_type: ResourceType, selection: Selection | None = None) -> JsonSchema:
        """Build the object schema of a resource.

        Args:
            resource_type (ResourceType): Resource declaration.
            selection (Selection | None): Schema-field and required selectors. Defaults to wildcards.

        Raises:
            DepthExceededError: If nesting goes deeper than `max_depth`.

        Returns:
            JsonSchema: Object schema, or a reference stub below the top level in reference mode.
        """
        if self.use_ref and self.depth > 0:
            get_resource_logger(resource_type.title).debug("Reference stub emitted", extra={"depth": self.depth})
            return self.reference_stub(resource_type)
        if self.depth > self.max_depth:
            raise DepthExceededError(resource_name=resource_type.title, max_depth=self.max_depth)

        selection = selection or Selection()
        property_names = set(schema_field_selector(resource_type, selection.schema_fields).field_names())
        required_names = set(required_field_selector(resource_type, selection.required).field_names())

        child = self._descend()
        properties: dict[str, JsonSchema] = {}
        required: list[str] = []
        for name, field in resource_type.fields.items():
            if name not in property_names:
                continue
            properties[name] = child.field_schema(field, selection.nested(name))
            if name in required_names:
                required.append(name)

        schema: JsonSchema = {
            "title": resource_type.title,
            "type": "object",
            "properties": properties,
            "additionalProperties": False,
        }
        if required:
            schema["required"] = required
        return schema


def generate_schema(
    resource: ResourceLike,
    *,
    selection: Selection | None = None,
    openapi: bool = False,
    use_ref: bool = False,
) -> JsonSchema:
    """Generate the schema document of a resource.

    Args:
        resource (ResourceLike): Resource type or `Resource` subclass.
        selection (Selection | None): Selectors narrowing properties and required fields.
        openapi (bool): Use the OpenAPI nullable dialect.
        use_ref (bool): Emit nested resources as reference stubs.

    Returns:
        JsonSchema: Object schema.
    """
    generator = JsonSchemaGenerator(openapi=openapi, use_ref=use_ref)
    return generator.resource_schema(resource.resource_type, selection)
