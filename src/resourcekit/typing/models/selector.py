"""Field selection values."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from resourcekit.exceptions import SelectorError

WILDCARD = "*"


@dataclass(frozen=True)
class Selector:
    """Nested inclusion specification.

    `items` holds field names and the wildcard in declaration order; `nested` holds the
    trailing mapping of field name to nested selector.
    """

    items: tuple[str, ...] = (WILDCARD,)
    nested: tuple[tuple[str, Selector], ...] = field(default=())

    @classmethod
    def wildcard(cls) -> Selector:
        """Selector including the role-specific default fields."""
        return cls()

    @classmethod
    def parse(cls, raw: Any) -> Selector:
        """Build a selector from its literal form.

        Accepted shapes: a `Selector`, a single field name, a mapping of field name to
        nested selection, or a sequence of field names / `"*"` whose last item may be
        such a mapping, e.g. `["id", {"images": ["id"]}]`.

        Args:
            raw (Any): Literal selection.

        Raises:
            SelectorError: If an item is neither a name nor a trailing mapping.

        Returns:
            Selector: Parsed selector.
        """
        if isinstance(raw, Selector):
            return raw
        if isinstance(raw, str):
            return cls(items=(raw,))
        if isinstance(raw, Mapping):
            return cls(items=(), nested=_parse_nested(raw))
        if not isinstance(raw, Iterable):
            raise SelectorError(message=f"Selection must be a sequence of field names, got {raw!r}")

        entries = list(raw)
        names: list[str] = []
        nested: tuple[tuple[str, Selector], ...] = ()
        for position, item in enumerate(entries):
            if isinstance(item, Mapping):
                if position != len(entries) - 1:
                    raise SelectorError(message="A nested selection mapping must be the last item")
                nested = _parse_nested(item)
            elif isinstance(item, str):
                names.append(item)
            else:
                raise SelectorError(message=f"Unsupported selection item {item!r}")
        return cls(items=tuple(names), nested=nested)

    @property
    def nested_map(self) -> dict[str, Selector]:
        """Trailing mapping as a dictionary."""
        return dict(self.nested)

    def explicit_names(self) -> list[str]:
        """Field names selected by name or nested mapping key, without wildcard expansion."""
        names = [item for item in self.items if item != WILDCARD]
        names.extend(name for name, _ in self.nested)
        return names

    def fetch(self, name: str) -> Selector:
        """Return the nested selector for `name`, or the wildcard selector."""
        return self.nested_map.get(name) or Selector.wildcard()


def _parse_nested(mapping: Mapping[Any, Any]) -> tuple[tuple[str, Selector], ...]:
    pairs: list[tuple[str, Selector]] = []
    for name, sub in mapping.items():
        if not isinstance(name, str):
            raise SelectorError(message=f"Nested selection keys must be field names, got {name!r}")
        pairs.append((name, Selector.parse(sub)))
    return tuple(pairs)


@dataclass(frozen=True)
class Selection:
    """The three independent selectors carried by a configured resource.

    `fields` decides what is serialized, `schema_fields` what the schema describes in
    `properties`, and `required` what the schema lists as required.
    """

    fields: Selector = field(default_factory=Selector.wildcard)
    required: Selector = field(default_factory=Selector.wildcard)
    schema_fields: Selector = field(default_factory=Selector.wildcard)

    @classmethod
    def build(cls, fields: Any = None, *, required: Any = None, schema_fields: Any = None) -> Selection:
        """Parse a selection from literal selectors.

        `schema_fields` defaults to `fields` so a narrowed resource describes what it emits;
        `required` defaults to the wildcard.

        Returns:
            Selection: Parsed selection.
        """
        parsed_fields = Selector.wildcard() if fields is None else Selector.parse(fields)
        return cls(
            fields=parsed_fields,
            required=Selector.wildcard() if required is None else Selector.parse(required),
            schema_fields=parsed_fields if schema_fields is None else Selector.parse(schema_fields),
        )

    def nested(self, name: str) -> Selection:
        """Narrow all three selectors one level for field `name`."""
        return Selection(
            fields=self.fields.fetch(name),
            required=self.required.fetch(name),
            schema_fields=self.schema_fields.fetch(name),
        )
