"""Resource type declaration and its builder."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, PrivateAttr, model_validator

from resourcekit.exceptions import DeclarationError
from resourcekit.logging import get_logger
from resourcekit.typing.models.field import Field

logger = get_logger("resourcekit")


def derive_title(name: str) -> str:
    """Build a schema title from a (qualified) type name.

    Classes declared inside a function keep only the part after the last `<locals>`.

    Args:
        name (str): Declared type name, e.g. `Catalog.ProductResource`.

    Returns:
        str: Name without namespace separators, e.g. `CatalogProductResource`.
    """
    parts = name.split(".")
    if "<locals>" in parts:
        parts = parts[len(parts) - parts[::-1].index("<locals>") :]
    return "".join(part for part in parts if part)


class ResourceType(BaseModel):
    """Immutable, ordered set of field declarations for one resource."""

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    name: str = ""
    title: str = ""
    declared: tuple[Field, ...] = ()
    owner: Any = None
    overrides: frozenset[str] = frozenset()

    _fields: Mapping[str, Field] = PrivateAttr(default_factory=lambda: MappingProxyType({}))

    @model_validator(mode="after")
    def _check_declarations(self) -> Self:
        """Reject duplicate names and overrides for undeclared fields.

        Raises:
            DeclarationError: If a field name is declared twice or an override has no field.

        Returns:
            Self: Validated model.
        """
        seen: set[str] = set()
        for declared in self.declared:
            if declared.name in seen:
                raise DeclarationError(message=f"Field '{declared.name}' is declared twice in '{self.name}'")
            seen.add(declared.name)
        unknown = sorted(self.overrides - seen)
        if unknown:
            raise DeclarationError(message=f"Overrides for undeclared fields in '{self.name}': {', '.join(unknown)}")
        return self

    def model_post_init(self, __context: object, /) -> None:
        """Index fields by name after model initialization.

        Args:
            __context (object): Pydantic model context.
        """
        self._fields = MappingProxyType({declared.name: declared for declared in self.declared})

    @property
    def resource_type(self) -> ResourceType:
        """A resource type is its own resource declaration."""
        return self

    @property
    def fields(self) -> Mapping[str, Field]:
        """Read-only mapping of field name to field, in declaration order."""
        return self._fields

    @property
    def field_names(self) -> list[str]:
        """Declared field names, in order."""
        return list(self._fields)

    @property
    def required_field_names(self) -> list[str]:
        """Names of fields not declared optional, in order."""
        return [name for name, declared in self._fields.items() if not declared.optional]


class ResourceTypeBuilder:
    """Fluent construction of a `ResourceType`.

    Fields are declared with repeated `field(...)` calls; `build()` returns the immutable
    declaration and closes the builder.
    """

    def __init__(self, name: str = "", *, title: str | None = None) -> None:
        self._name = name
        self._title = derive_title(name) if title is None else title
        self._fields: list[Field] = []
        self._built = False

    @property
    def names(self) -> list[str]:
        """Names declared so far."""
        return [declared.name for declared in self._fields]

    def add(self, declared: Field) -> Self:
        """Append an already-built field.

        Args:
            declared (Field): Field declaration.

        Raises:
            DeclarationError: If the builder is closed or the name is already declared.

        Returns:
            Self: The builder.
        """
        if self._built:
            raise DeclarationError(message=f"Resource type '{self._name}' is already built")
        if declared.name in self.names:
            raise DeclarationError(message=f"Field '{declared.name}' is declared twice in '{self._name}'")
        self._fields.append(declared)
        return self

    def field(
        self,
        name: str,
        type_: Any,
        *,
        null: bool = False,
        optional: bool = False,
        default: Any = None,
        **options: Any,
    ) -> Self:
        """Declare a field.

        Args:
            name (str): Field name; a trailing `?` marks it optional.
            type_ (Any): Type declaration accepted by `to_type`.
            null (bool): Whether the value may be null.
            optional (bool): Whether the field may be absent.
            default (Any): Value substituted when the serialized value is missing.
            **options (Any): Extra schema keywords merged into the field schema.

        Returns:
            Self: The builder.
        """
        return self.add(
            Field(
                name=name,
                type=type_,
                nullable=null,
                optional=optional,
                default=default,
                extra_options=options,
            ),
        )

    def build(self, *, owner: Any = None, overrides: Iterable[str] = ()) -> ResourceType:
        """Close the builder and return the resource type.

        Args:
            owner (Any): Declaring class providing accessor overrides.
            overrides (Iterable[str]): Names of fields read through an accessor on `owner`.

        Returns:
            ResourceType: Immutable declaration.
        """
        resource_type = ResourceType(
            name=self._name,
            title=self._title,
            declared=tuple(self._fields),
            owner=owner,
            overrides=frozenset(overrides),
        )
        self._built = True
        logger.debug(
            "Resource type declared",
            extra={"resource": resource_type.title, "field_count": len(resource_type.declared)},
        )
        return resource_type
