from __future__ import annotations

import datetime
import enum
from decimal import Decimal
from typing import Optional

import pytest

from resourcekit.exceptions import DeclarationError, UnsupportedTypeError
from resourcekit.typing.enums import ScalarKind
from resourcekit.typing.models import ResourceTypeBuilder
from resourcekit.typing.types import (
    ArrayOf,
    Enum,
    NullableOf,
    ResourceRef,
    Scalar,
    element_type,
    resource_of,
    scalar_kind_of,
    to_type,
)

IMAGE_TYPE = ResourceTypeBuilder("ProductImage").field("id", int).field("url", str).build()


class Genre(enum.Enum):
    SUSHI = "Sushi"
    RAMEN = "Ramen"


@pytest.mark.parametrize(
    ("declared", "kind"),
    [
        (int, ScalarKind.INTEGER),
        (float, ScalarKind.NUMBER),
        (Decimal, ScalarKind.NUMBER),
        (str, ScalarKind.STRING),
        (bool, ScalarKind.BOOLEAN),
        (datetime.date, ScalarKind.DATE),
        (datetime.datetime, ScalarKind.DATETIME),
    ],
)
def test_to_type_maps_python_scalars(declared: type, kind: ScalarKind) -> None:
    assert to_type(declared) == Scalar(kind)


def test_to_type_builds_arrays_from_list_literal_and_generic() -> None:
    assert to_type([str]) == ArrayOf(Scalar(ScalarKind.STRING))
    assert to_type(list[int]) == ArrayOf(Scalar(ScalarKind.INTEGER))


def test_to_type_builds_nullable_from_optional_unions() -> None:
    assert to_type(int | None) == NullableOf(Scalar(ScalarKind.INTEGER))
    assert to_type(Optional[str]) == NullableOf(Scalar(ScalarKind.STRING))  # noqa: UP045


def test_to_type_reads_stdlib_enum_values() -> None:
    assert to_type(Genre) == Enum(("Sushi", "Ramen"))


def test_to_type_returns_type_defs_unchanged() -> None:
    declared = ArrayOf(Scalar(ScalarKind.BOOLEAN))

    assert to_type(declared) is declared


def test_to_type_recognizes_resources_by_capability() -> None:
    ref = to_type(IMAGE_TYPE)

    assert isinstance(ref, ResourceRef)
    assert ref.resource_type is IMAGE_TYPE


def test_to_type_accepts_lazy_resource_reference() -> None:
    ref = to_type(lambda: IMAGE_TYPE)

    assert isinstance(ref, ResourceRef)
    assert ref.resource_type is IMAGE_TYPE


def test_lazy_reference_to_non_resource_fails() -> None:
    ref = ResourceRef(lambda: 42)

    with pytest.raises(UnsupportedTypeError, match="does not resolve to a resource"):
        _ = ref.resource


@pytest.mark.parametrize("declared", [object, complex, int | str, list])
def test_to_type_rejects_unsupported_declarations(declared: object) -> None:
    with pytest.raises(UnsupportedTypeError):
        to_type(declared)


def test_to_type_rejects_array_literal_with_several_items() -> None:
    with pytest.raises(DeclarationError, match="exactly one item type"):
        to_type([int, str])


def test_enum_kind_follows_first_value() -> None:
    assert Enum(("Sushi", "Ramen")).kind == ScalarKind.STRING
    assert Enum((1, 2, 3)).kind == ScalarKind.INTEGER
    assert Enum((True, False)).kind == ScalarKind.BOOLEAN
    assert Enum([1.5, 2.5]).values == (1.5, 2.5)


def test_enum_rejects_empty_values() -> None:
    with pytest.raises(DeclarationError, match="at least one value"):
        Enum(())


@pytest.mark.parametrize("values", [("a", 1), (1, 2.5), (True, 1)])
def test_enum_rejects_mixed_kinds(values: tuple[object, ...]) -> None:
    with pytest.raises(DeclarationError, match="one scalar kind"):
        Enum(values)


def test_scalar_kind_of_rejects_non_scalars() -> None:
    with pytest.raises(UnsupportedTypeError):
        scalar_kind_of(object())


def test_element_type_and_resource_of_strip_wrappers() -> None:
    wrapped = NullableOf(ArrayOf(NullableOf(ResourceRef(IMAGE_TYPE))))

    assert element_type(wrapped) == ResourceRef(IMAGE_TYPE)
    assert resource_of(wrapped) is IMAGE_TYPE
    assert resource_of(ArrayOf(Scalar(ScalarKind.STRING))) is None
