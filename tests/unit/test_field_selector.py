from __future__ import annotations

import pytest

from resourcekit.exceptions import SelectorError
from resourcekit.field_selector import (
    FieldSelector,
    required_field_selector,
    schema_field_selector,
    validate_selector,
)
from resourcekit.typing.models import WILDCARD, ResourceTypeBuilder, Selection, Selector

IMAGE_TYPE = ResourceTypeBuilder("ProductImage").field("id", int).field("url", str).build()
PRODUCT_TYPE = (
    ResourceTypeBuilder("Product")
    .field("id", int)
    .field("name", str)
    .field("image_url?", str)
    .field("product_images", [IMAGE_TYPE])
    .build()
)


def test_parse_plain_names() -> None:
    selector = Selector.parse(["id", "name"])

    assert selector.items == ("id", "name")
    assert selector.nested == ()


def test_parse_trailing_mapping() -> None:
    selector = Selector.parse(["id", {"product_images": ["id"]}])

    assert selector.items == ("id",)
    assert selector.nested_map["product_images"] == Selector(items=("id",))


def test_parse_single_name_mapping_and_selector() -> None:
    existing = Selector.parse(["id"])

    assert Selector.parse("id") == Selector(items=("id",))
    assert Selector.parse({"product_images": "url"}).nested_map == {"product_images": Selector(items=("url",))}
    assert Selector.parse(existing) is existing


def test_parse_rejects_mapping_before_last_item() -> None:
    with pytest.raises(SelectorError, match="must be the last item"):
        Selector.parse([{"product_images": ["id"]}, "id"])


@pytest.mark.parametrize("raw", [42, ["id", 3], {1: ["id"]}])
def test_parse_rejects_unsupported_items(raw: object) -> None:
    with pytest.raises(SelectorError):
        Selector.parse(raw)


def test_fetch_defaults_to_wildcard() -> None:
    selector = Selector.parse(["id", {"product_images": ["id"]}])

    assert selector.fetch("product_images").items == ("id",)
    assert selector.fetch("other") == Selector.wildcard()
    assert Selector.wildcard().items == (WILDCARD,)


def test_explicit_names_exclude_wildcard() -> None:
    selector = Selector.parse([WILDCARD, "image_url", {"product_images": ["id"]}])

    assert selector.explicit_names() == ["image_url", "product_images"]


def test_field_names_expand_wildcard_to_role_defaults() -> None:
    selector = FieldSelector(default_field_names=["a", "b"], selector=Selector.parse(["b", WILDCARD, {"c": []}]))

    assert selector.field_names() == ["b", "a", "b", "c"]


def test_role_defaults_differ_between_properties_and_required() -> None:
    wildcard = Selector.wildcard()

    assert schema_field_selector(PRODUCT_TYPE, wildcard).field_names() == [
        "id",
        "name",
        "image_url",
        "product_images",
    ]
    assert required_field_selector(PRODUCT_TYPE, wildcard).field_names() == ["id", "name", "product_images"]


def test_field_selector_is_pure() -> None:
    selector = FieldSelector(default_field_names=["a"], selector=Selector.wildcard())

    assert selector.field_names() == selector.field_names()
    assert selector.fetch("a") == selector.fetch("a")


def test_selection_build_defaults() -> None:
    selection = Selection.build(["id"])

    assert selection.fields == Selector(items=("id",))
    assert selection.schema_fields == selection.fields
    assert selection.required == Selector.wildcard()
    assert Selection.build() == Selection()


def test_selection_nested_narrows_every_role() -> None:
    selection = Selection.build(
        ["id", {"product_images": ["id"]}],
        required=["id", {"product_images": []}],
        schema_fields=[WILDCARD],
    )

    nested = selection.nested("product_images")

    assert nested.fields == Selector(items=("id",))
    assert nested.required == Selector(items=())
    assert nested.schema_fields == Selector.wildcard()


def test_validate_selector_accepts_declared_names() -> None:
    validate_selector(Selector.parse(["id", {"product_images": ["url"]}]), PRODUCT_TYPE)


def test_validate_selector_rejects_unknown_field() -> None:
    with pytest.raises(SelectorError, match="Unknown field 'price'"):
        validate_selector(Selector.parse(["id", "price"]), PRODUCT_TYPE)


def test_validate_selector_rejects_nested_selection_on_scalar() -> None:
    with pytest.raises(SelectorError, match="does not hold a resource"):
        validate_selector(Selector.parse([{"name": ["id"]}]), PRODUCT_TYPE)


def test_validate_selector_checks_nested_resource() -> None:
    with pytest.raises(SelectorError, match="Unknown field 'width'"):
        validate_selector(Selector.parse([{"product_images": ["width"]}]), PRODUCT_TYPE)
