"""Value resolution strategies used by the serializer.

Each resolver either returns the value of one field or `MISSING`; the serializer tries
them in order and the first hit wins.
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Final, Protocol

PREDICATE_PREFIX = "is_"


class _Missing:
    """Marker for "no value could be resolved"."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


@dataclass(frozen=True)
class AccessRequest:
    """One field lookup.

    Attributes:
        source: Object being serialized.
        name: Field name.
        scope: Accessor scope bound to `source`, if the resource declares one.
        overrides: Names of fields whose accessor lives on the scope.
    """

    source: object
    name: str
    scope: object | None = None
    overrides: frozenset[str] = frozenset()


class ValueResolver(Protocol):
    """Resolution strategy interface."""

    def resolve(self, request: AccessRequest) -> Any:
        """Return the field value, or `MISSING`.

        Args:
            request: Field lookup.

        Returns:
            Any: Resolved value or `MISSING`.
        """


def _read(owner: object, attribute: str) -> Any:
    value = getattr(owner, attribute, MISSING)
    if inspect.ismethod(value):
        return value()
    return value


class OverrideResolver:
    """Reads accessors defined on the resource class itself."""

    def resolve(self, request: AccessRequest) -> Any:
        if request.scope is None or request.name not in request.overrides:
            return MISSING
        value = getattr(request.scope, request.name, MISSING)
        # Static methods come back as plain functions.
        return value() if callable(value) else value


class KeyResolver:
    """Reads keys of mapping sources."""

    def resolve(self, request: AccessRequest) -> Any:
        source = request.source
        if isinstance(source, Mapping) and request.name in source:
            return source[request.name]
        return MISSING


class AttributeResolver:
    """Reads same-named attributes, properties or zero-argument methods."""

    def resolve(self, request: AccessRequest) -> Any:
        if isinstance(request.source, Mapping):
            return MISSING
        return _read(request.source, request.name)


class PredicateResolver:
    """Reads boolean predicates named `is_<field>`."""

    def resolve(self, request: AccessRequest) -> Any:
        if isinstance(request.source, Mapping):
            return MISSING
        return _read(request.source, f"{PREDICATE_PREFIX}{request.name}")


DEFAULT_RESOLVERS: tuple[ValueResolver, ...] = (
    OverrideResolver(),
    KeyResolver(),
    AttributeResolver(),
    PredicateResolver(),
)


def resolve_value(request: AccessRequest, resolvers: tuple[ValueResolver, ...] = DEFAULT_RESOLVERS) -> Any:
    """Try each resolver in order.

    Args:
        request (AccessRequest): Field lookup.
        resolvers (tuple[ValueResolver, ...]): Strategies, highest priority first.

    Returns:
        Any: First resolved value, or `MISSING` when no strategy applies.
    """
    for resolver in resolvers:
        value = resolver.resolve(request)
        if value is not MISSING:
            return value
    return MISSING
