"""Declarative resource classes."""

from __future__ import annotations

import copy
from collections.abc import Sequence
from typing import Any, ClassVar, Self

from resourcekit.field_selector import validate_selector
from resourcekit.json_schema import JsonSchema, JsonSchemaGenerator
from resourcekit.serializer import Serializer
from resourcekit.typing.models import Field, ResourceType, ResourceTypeBuilder, Selection
from resourcekit.typing.types import Enum


def field(
    name: str,
    type_: Any,
    *,
    null: bool = False,
    optional: bool = False,
    default: Any = None,
    **options: Any,
) -> Field:
    """Declare a resource field.

    Args:
        name (str): Field name; a trailing `?` marks the field optional.
        type_ (Any): Type declaration, e.g. `int`, `[str]`, `enum("a", "b")`, a resource class,
            or `lambda: SomeResource` for references to resources declared later.
        null (bool): Whether the value may be null.
        optional (bool): Whether the field may be absent from the source object.
        default (Any): Value emitted when the serialized value is `None` or `False`.
        **options (Any): Extra schema keywords, e.g. `description="..."`.

    Returns:
        Field: Field declaration.
    """
    return Field(name=name, type=type_, nullable=null, optional=optional, default=default, extra_options=options)


def enum(*values: Any) -> Enum:
    """Declare an enumeration of literal values."""
    return Enum(values)


def _defines_accessor(cls: type, name: str) -> bool:
    for klass in cls.__mro__:
        if klass is Resource:
            return False
        attribute = klass.__dict__.get(name)
        if callable(attribute) or isinstance(attribute, property | staticmethod | classmethod):
            return True
    return False


class Resource:
    """Base class for declared resources.

    Subclasses list their fields in `fields`; any method or property named after a field
    overrides how that field is read. Inside an accessor, `self.object` is the source
    object and `self.context` the value passed at construction.
    `schema_title` replaces the title derived from the class name.

    Example:
        class ProductResource(Resource):
            fields = (field("id", int), field("name", str), field("image_url?", str))

            def name(self) -> str:
                return self.object.name.title()
    """

    fields: ClassVar[Sequence[Field]] = ()
    schema_title: ClassVar[str | None] = None
    resource_type: ClassVar[ResourceType]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        """Build the immutable resource declaration of the subclass."""
        super().__init_subclass__(**kwargs)
        builder = ResourceTypeBuilder(cls.__qualname__, title=cls.__dict__.get("schema_title"))
        for declared in cls.fields:
            builder.add(declared)
        overrides = [name for name in builder.names if _defines_accessor(cls, name)]
        cls.resource_type = builder.build(owner=cls, overrides=overrides)

    def __init__(self, *, context: Any = None, selection: Selection | None = None) -> None:
        self.context = context
        self.selection = selection or Selection()
        self.object: Any = None

    @classmethod
    def select(
        cls,
        fields: Any,
        *,
        required: Any = None,
        schema_fields: Any = None,
        context: Any = None,
    ) -> Self:
        """Return a resource narrowed to a field selection.

        Args:
            fields (Any): Serialization selector, e.g. `["id", {"images": ["id"]}]`.
            required (Any): Required-field selector. Defaults to the wildcard.
            schema_fields (Any): Schema-field selector. Defaults to `fields`.
            context (Any): Opaque value available to accessors.

        Returns:
            Self: Configured resource.
        """
        selection = Selection.build(fields, required=required, schema_fields=schema_fields)
        validate_selector(selection.fields, cls.resource_type)
        validate_selector(selection.required, cls.resource_type)
        validate_selector(selection.schema_fields, cls.resource_type)
        return cls(context=context, selection=selection)

    def bind(self, source: object) -> Self:
        """Return a copy of the resource reading from `source`."""
        bound = copy.copy(self)
        bound.object = source
        return bound

    def serialize(self, source: object) -> dict[str, Any] | list[dict[str, Any]]:
        """Serialize a record, or each record of a collection.

        Args:
            source (object): Record or collection of records.

        Returns:
            dict[str, Any] | list[dict[str, Any]]: Serialized record(s).
        """
        serializer = Serializer(self.resource_type, selection=self.selection, context=self.context, scope=self)
        return serializer.serialize(source)

    def to_json_schema(self, *, openapi: bool = False, use_ref: bool = False) -> JsonSchema:
        """Generate the schema of the resource for its current selection.

        Args:
            openapi (bool): Use the OpenAPI nullable dialect.
            use_ref (bool): Emit nested resources as reference stubs.

        Returns:
            JsonSchema: Object schema.
        """
        generator = JsonSchemaGenerator(openapi=openapi, use_ref=use_ref)
        return generator.resource_schema(self.resource_type, self.selection)
