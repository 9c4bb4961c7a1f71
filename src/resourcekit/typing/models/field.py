"""Field declaration model."""

from __future__ import annotations

from typing import Any

import pydantic
from pydantic import BaseModel, ConfigDict, model_validator

from resourcekit.typing.types import TypeDef, to_type

OPTIONAL_MARKER = "?"


def parse_field_name(name: str) -> tuple[str, bool]:
    """Split a declared field name into its stored name and optional flag.

    Args:
        name (str): Declared name, possibly ending with `?`.

    Returns:
        tuple[str, bool]: Stored name and whether the marker was present.
    """
    if name.endswith(OPTIONAL_MARKER):
        return name[: -len(OPTIONAL_MARKER)], True
    return name, False


class Field(BaseModel):
    """One named, typed attribute of a resource type."""

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    name: str = pydantic.Field(min_length=1)
    type: TypeDef
    nullable: bool = False
    optional: bool = False
    default: Any = None
    extra_options: dict[str, Any] = pydantic.Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _parse_declaration(cls, data: Any) -> Any:
        """Strip the optional marker from the name and convert the declared type.

        Args:
            data (Any): Raw constructor payload.

        Returns:
            Any: Normalized payload.
        """
        if not isinstance(data, dict):
            return data
        payload = dict(data)
        name = payload.get("name")
        if isinstance(name, str):
            payload["name"], marked = parse_field_name(name)
            payload["optional"] = marked or bool(payload.get("optional", False))
        if "type" in payload:
            payload["type"] = to_type(payload["type"])
        return payload

    @property
    def has_default(self) -> bool:
        """Whether a default value is declared."""
        return self.default is not None
