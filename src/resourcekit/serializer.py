"""Serialization of source objects into JSON-compatible value trees."""

from __future__ import annotations

import copy
import dataclasses
import datetime
import enum
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from resourcekit.accessors import DEFAULT_RESOLVERS, MISSING, AccessRequest, ValueResolver, resolve_value
from resourcekit.exceptions import AccessorMissingError, DepthExceededError, ShapeMismatchError
from resourcekit.field_selector import serialization_field_selector
from resourcekit.logging import get_resource_logger
from resourcekit.settings import get_settings
from resourcekit.typing.enums import ScalarKind
from resourcekit.typing.models import Selection
from resourcekit.typing.types import ArrayOf, NullableOf, ResourceRef, Scalar

if TYPE_CHECKING:
    from resourcekit.typing.models import Field, ResourceType
    from resourcekit.typing.protocol import AccessorScope, ResourceLike
    from resourcekit.typing.types import TypeDef


def is_single_record(source: object) -> bool:
    """Whether `source` is one record rather than a collection of records.

    Mappings, dataclass instances, named tuples and pydantic models are records; any other
    non-string iterable is a collection.
    """
    if isinstance(source, Mapping | BaseModel):
        return True
    if dataclasses.is_dataclass(source) and not isinstance(source, type):
        return True
    if isinstance(source, tuple) and hasattr(source, "_fields"):
        return True
    return isinstance(source, str | bytes) or not isinstance(source, Iterable)


def _is_sequence(value: object) -> bool:
    return not is_single_record(value)


def _is_blank(value: object) -> bool:
    return value is None or value is False


class Serializer:
    """Recursive serializer for one resource type.

    Args:
        resource_type: Resource declaration.
        selection: Serialization, required and schema-field selectors. Defaults to wildcards.
        context: Opaque value handed unchanged to every nested serializer and accessor scope.
        scope: Accessor scope providing field overrides, bound to each source object.
        depth: Current nesting depth.
        max_depth: Maximum nesting depth. Defaults to `Settings.max_depth`.
        resolvers: Value resolution strategies, highest priority first.
    """

    def __init__(
        self,
        resource_type: ResourceType,
        *,
        selection: Selection | None = None,
        context: Any = None,
        scope: AccessorScope | None = None,
        depth: int = 0,
        max_depth: int | None = None,
        resolvers: tuple[ValueResolver, ...] = DEFAULT_RESOLVERS,
    ) -> None:
        self.resource_type = resource_type
        self.selection = selection or Selection()
        self.context = context
        self.scope = scope
        self.depth = depth
        self.max_depth = get_settings().max_depth if max_depth is None else max_depth
        self.resolvers = resolvers
        self._logger = get_resource_logger(resource_type.title or resource_type.name)

    def serialize(self, source: object) -> dict[str, Any] | list[dict[str, Any]]:
        """Serialize one record, or each record of a collection.

        Args:
            source (object): Record or collection of records.

        Returns:
            dict[str, Any] | list[dict[str, Any]]: Serialized record(s).
        """
        if is_single_record(source):
            return self.serialize_one(source)
        return [self.serialize_one(item) for item in source]  # type: ignore[union-attr]

    def serialize_one(self, source: object) -> dict[str, Any]:
        """Serialize one record.

        Args:
            source (object): Record to read field values from.

        Raises:
            DepthExceededError: If nesting goes deeper than `max_depth`.
            AccessorMissingError: If a selected field cannot be read from `source`.

        Returns:
            dict[str, Any]: Field values keyed by name, in declaration order.
        """
        if self.depth > self.max_depth:
            raise DepthExceededError(resource_name=self.resource_type.title, max_depth=self.max_depth)

        field_selector = serialization_field_selector(self.resource_type, self.selection.fields)
        selected = set(field_selector.field_names())
        explicit = set(self.selection.fields.explicit_names())
        scope = self.scope.bind(source) if self.scope is not None else None

        result: dict[str, Any] = {}
        for name, field in self.resource_type.fields.items():
            if name not in selected:
                continue
            request = AccessRequest(source=source, name=name, scope=scope, overrides=self.resource_type.overrides)
            value = resolve_value(request, self.resolvers)
            if value is MISSING:
                if field.optional and name not in explicit:
                    self._logger.debug("Optional field skipped", extra={"field": name})
                    continue
                raise AccessorMissingError(
                    field_name=name,
                    resource_name=self.resource_type.title or self.resource_type.name,
                    source_type=type(source).__name__,
                )
            result[name] = self._convert_field(field, value)
        return result

    def _convert_field(self, field: Field, value: Any) -> Any:
        type_ = NullableOf(field.type) if field.nullable and not isinstance(field.type, NullableOf) else field.type
        converted = self._convert(type_, value, field.name)
        if field.has_default and _is_blank(converted):
            return copy.deepcopy(field.default)
        return converted

    def _convert(self, type_: TypeDef, value: Any, name: str) -> Any:
        if isinstance(type_, NullableOf):
            return None if value is None else self._convert(type_.inner, value, name)
        if isinstance(type_, ArrayOf):
            if not _is_sequence(value):
                raise ShapeMismatchError(field_name=name, actual=type(value).__name__)
            return [self._convert(type_.item, item, name) for item in value]
        if isinstance(type_, ResourceRef):
            if value is None:
                return None
            return self._nested(type_.resource, name).serialize_one(value)
        return self._coerce_scalar(type_, value)

    @staticmethod
    def _coerce_scalar(type_: TypeDef, value: Any) -> Any:
        if isinstance(value, enum.Enum):
            return value.value
        if (
            isinstance(type_, Scalar)
            and type_.kind == ScalarKind.DATETIME
            and isinstance(value, datetime.datetime)
        ):
            if value.tzinfo is None:
                value = value.replace(tzinfo=datetime.UTC)
            return value.isoformat(timespec="milliseconds")
        return value

    def _nested(self, resource: ResourceLike, name: str) -> Serializer:
        nested_type = resource.resource_type
        selection = self.selection.nested(name)
        owner = nested_type.owner
        scope = owner(context=self.context, selection=selection) if owner is not None else None
        return Serializer(
            nested_type,
            selection=selection,
            context=self.context,
            scope=scope,
            depth=self.depth + 1,
            max_depth=self.max_depth,
            resolvers=self.resolvers,
        )


def serialize(
    resource: ResourceLike,
    source: object,
    *,
    selection: Selection | None = None,
    context: Any = None,
) -> dict[str, Any] | list[dict[str, Any]]:
    """Serialize a record or a collection of records with a resource declaration.

    Args:
        resource (ResourceLike): Resource type or `Resource` subclass.
        source (object): Record or collection of records.
        selection (Selection | None): Selectors narrowing the emitted fields.
        context (Any): Opaque value passed to accessor overrides.

    Returns:
        dict[str, Any] | list[dict[str, Any]]: Serialized record(s).
    """
    resource_type = resource.resource_type
    selection = selection or Selection()
    owner = resource_type.owner
    scope = owner(context=context, selection=selection) if owner is not None else None
    return Serializer(resource_type, selection=selection, context=context, scope=scope).serialize(source)
