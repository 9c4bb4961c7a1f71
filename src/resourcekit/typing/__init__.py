"""Typing-centric domain modules."""

from resourcekit.typing.enums import ParameterLocation, ScalarKind
from resourcekit.typing.models import (
    WILDCARD,
    Field,
    ResourceType,
    ResourceTypeBuilder,
    Selection,
    Selector,
)
from resourcekit.typing.protocol import AccessorScope, ResourceLike
from resourcekit.typing.types import ArrayOf, Enum, NullableOf, ResourceRef, Scalar, TypeDef, to_type

__all__ = [
    "WILDCARD",
    "AccessorScope",
    "ArrayOf",
    "Enum",
    "Field",
    "NullableOf",
    "ParameterLocation",
    "ResourceLike",
    "ResourceRef",
    "ResourceType",
    "ResourceTypeBuilder",
    "Scalar",
    "ScalarKind",
    "Selection",
    "Selector",
    "TypeDef",
    "to_type",
]
