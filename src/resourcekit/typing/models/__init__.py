"""Core domain model exports."""

from resourcekit.typing.models.field import Field, parse_field_name
from resourcekit.typing.models.resource_type import ResourceType, ResourceTypeBuilder, derive_title
from resourcekit.typing.models.selector import WILDCARD, Selection, Selector

__all__ = [
    "WILDCARD",
    "Field",
    "ResourceType",
    "ResourceTypeBuilder",
    "Selection",
    "Selector",
    "derive_title",
    "parse_field_name",
]
