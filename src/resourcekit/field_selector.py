"""Resolution of selectors against resource declarations."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from resourcekit.exceptions import SelectorError
from resourcekit.typing.models import WILDCARD, Selector
from resourcekit.typing.types import resource_of

if TYPE_CHECKING:
    from resourcekit.typing.models import ResourceType


@dataclass(frozen=True)
class FieldSelector:
    """One selector resolved against a role-specific default field set.

    The wildcard expands to `default_field_names`; what that set is (all fields, required
    fields) is decided by the caller, not by the selector.
    """

    default_field_names: Sequence[str]
    selector: Selector

    def field_names(self) -> list[str]:
        """Reduce the selector items left to right into field names.

        Duplicates are kept; callers only test membership.

        Returns:
            list[str]: Selected field names.
        """
        names: list[str] = []
        for item in self.selector.items:
            if item == WILDCARD:
                names.extend(self.default_field_names)
            else:
                names.append(item)
        names.extend(name for name, _ in self.selector.nested)
        return names

    def fetch(self, name: str) -> Selector:
        """Return the selector to pass one level down for field `name`."""
        return self.selector.fetch(name)


def schema_field_selector(resource_type: ResourceType, selector: Selector) -> FieldSelector:
    """Field selector for the schema `properties` role (wildcard: all declared fields)."""
    return FieldSelector(default_field_names=resource_type.field_names, selector=selector)


def required_field_selector(resource_type: ResourceType, selector: Selector) -> FieldSelector:
    """Field selector for the schema `required` role (wildcard: non-optional fields)."""
    return FieldSelector(default_field_names=resource_type.required_field_names, selector=selector)


def serialization_field_selector(resource_type: ResourceType, selector: Selector) -> FieldSelector:
    """Field selector for the serialization role (wildcard: all declared fields)."""
    return FieldSelector(default_field_names=resource_type.field_names, selector=selector)


def validate_selector(selector: Selector, resource_type: ResourceType) -> None:
    """Check a selector against a resource declaration, recursively.

    Args:
        selector (Selector): Selector to check.
        resource_type (ResourceType): Resource the selector applies to.

    Raises:
        SelectorError: If a name is not declared, or a nested selection targets a field that
            does not hold a resource.
    """
    declared = resource_type.fields
    resource_name = resource_type.title or resource_type.name
    for name in selector.explicit_names():
        if name not in declared:
            raise SelectorError(message=f"Unknown field '{name}' selected on '{resource_name}'")

    for name, nested in selector.nested:
        nested_type = resource_of(declared[name].type)
        if nested_type is None:
            raise SelectorError(message=f"Field '{name}' does not hold a resource and cannot take a nested selection")
        validate_selector(nested, nested_type)
