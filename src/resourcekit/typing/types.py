"""Value type algebra used by field declarations."""

from __future__ import annotations

import datetime
import enum
import inspect
import types
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Union, get_args, get_origin

from resourcekit.exceptions import DeclarationError, UnsupportedTypeError
from resourcekit.typing.enums import ScalarKind
from resourcekit.typing.protocol import ResourceLike

if TYPE_CHECKING:
    from resourcekit.typing.models import ResourceType

_SCALAR_KINDS: dict[type, ScalarKind] = {
    int: ScalarKind.INTEGER,
    float: ScalarKind.NUMBER,
    Decimal: ScalarKind.NUMBER,
    str: ScalarKind.STRING,
    bool: ScalarKind.BOOLEAN,
    datetime.date: ScalarKind.DATE,
    datetime.datetime: ScalarKind.DATETIME,
}


class TypeDef:
    """Base for type variants."""

    __slots__ = ()


@dataclass(frozen=True)
class Scalar(TypeDef):
    """Scalar type: Scalar(ScalarKind.INTEGER)."""

    kind: ScalarKind


@dataclass(frozen=True)
class Enum(TypeDef):
    """Fixed, ordered set of literal values sharing one scalar kind."""

    values: tuple[Any, ...]

    def __post_init__(self) -> None:
        """Freeze the values and reject empty or mixed-kind declarations.

        Raises:
            DeclarationError: If no value is given or values have different scalar kinds.
        """
        values = tuple(self.values)
        object.__setattr__(self, "values", values)
        if not values:
            raise DeclarationError(message="Enum requires at least one value")
        kinds = {scalar_kind_of(value) for value in values}
        if len(kinds) > 1:
            found = ", ".join(sorted(kind.value for kind in kinds))
            raise DeclarationError(message=f"Enum values must share one scalar kind, got: {found}")

    @property
    def kind(self) -> ScalarKind:
        """Scalar kind of the first value."""
        return scalar_kind_of(self.values[0])


@dataclass(frozen=True)
class ArrayOf(TypeDef):
    """Homogeneous sequence: list[int] -> ArrayOf(Scalar(ScalarKind.INTEGER))."""

    item: TypeDef


@dataclass(frozen=True)
class NullableOf(TypeDef):
    """Inner type or absence of value: int | None -> NullableOf(Scalar(...))."""

    inner: TypeDef


@dataclass(frozen=True)
class ResourceRef(TypeDef):
    """Embedded resource type.

    `target` exposes the resource capability, or is a zero-argument callable returning
    something that does. The callable form allows self-referential and cyclic graphs,
    where the referenced resource is not defined yet when the field is declared.
    """

    target: Any

    @property
    def resource(self) -> ResourceLike:
        """Resolve the referenced resource.

        Raises:
            UnsupportedTypeError: If the target does not resolve to a resource.

        Returns:
            ResourceLike: Referenced resource.
        """
        target = self.target
        if not isinstance(target, ResourceLike) and callable(target):
            target = target()
        if not isinstance(target, ResourceLike):
            raise UnsupportedTypeError(type_=target, message="Resource reference does not resolve to a resource")
        return target

    @property
    def resource_type(self) -> ResourceType:
        """Declaration of the referenced resource."""
        return self.resource.resource_type


def scalar_kind_of(value: object) -> ScalarKind:
    """Infer the scalar kind of a literal value.

    Args:
        value: Literal value.

    Raises:
        UnsupportedTypeError: If the value is not a scalar.

    Returns:
        ScalarKind: Kind of the value.
    """
    for klass in type(value).__mro__:
        if (kind := _SCALAR_KINDS.get(klass)) is not None:
            return kind
    raise UnsupportedTypeError(type_=type(value), message="Unsupported literal type")


def to_type(declared: Any) -> TypeDef:
    """Convert a Python type declaration to a `TypeDef`.

    Args:
        declared: A `TypeDef`, a scalar Python type, a one-item list `[X]`, `list[X]`,
            `X | None`, a stdlib `enum.Enum` subclass, a resource, or a zero-argument
            callable returning a resource.

    Raises:
        DeclarationError: If a list literal does not hold exactly one item type.
        UnsupportedTypeError: If the declaration cannot be classified.

    Returns:
        TypeDef: Type algebra value.
    """
    if isinstance(declared, TypeDef):
        return declared

    if isinstance(declared, list):
        if len(declared) != 1:
            raise DeclarationError(message=f"Array declaration takes exactly one item type, got {declared!r}")
        return ArrayOf(to_type(declared[0]))

    origin = get_origin(declared)
    args = get_args(declared)

    if origin is list or origin is Sequence:
        if not args:
            raise UnsupportedTypeError(type_=declared, message="Array type must have an item type")
        return ArrayOf(to_type(args[0]))

    if isinstance(declared, types.UnionType) or origin is Union:
        members = [arg for arg in args if arg is not type(None)]
        if len(members) != 1 or len(members) == len(args):
            raise UnsupportedTypeError(type_=declared, message="Only `X | None` unions are supported")
        return NullableOf(to_type(members[0]))

    if isinstance(declared, type):
        if issubclass(declared, enum.Enum):
            return Enum(tuple(member.value for member in declared))
        if declared in _SCALAR_KINDS:
            return Scalar(_SCALAR_KINDS[declared])

    if isinstance(declared, ResourceLike):
        return ResourceRef(declared)

    if inspect.isfunction(declared):
        return ResourceRef(declared)

    raise UnsupportedTypeError(type_=declared)


def element_type(type_: TypeDef) -> TypeDef:
    """Strip nullable and array wrappers down to the item type."""
    while isinstance(type_, NullableOf | ArrayOf):
        type_ = type_.inner if isinstance(type_, NullableOf) else type_.item
    return type_


def resource_of(type_: TypeDef) -> ResourceType | None:
    """Return the nested resource declaration of a (wrapped) resource reference, if any."""
    item = element_type(type_)
    if isinstance(item, ResourceRef):
        return item.resource_type
    return None
