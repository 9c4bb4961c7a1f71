"""Capability interfaces consumed by the engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, Self, runtime_checkable

if TYPE_CHECKING:
    from resourcekit.typing.models import ResourceType, Selection


@runtime_checkable
class ResourceLike(Protocol):
    """Anything that can be embedded as a nested resource.

    Both `ResourceType` values and `Resource` subclasses expose this capability.
    """

    @property
    def resource_type(self) -> ResourceType:
        """Return the declared resource type.

        Returns:
            ResourceType: Immutable resource declaration.
        """


class AccessorScope(Protocol):
    """Object holding per-field accessor overrides for one resource type."""

    def __init__(self, *, context: Any = None, selection: Selection | None = None) -> None:
        """Create a scope for one serialization call."""

    def bind(self, source: object) -> Self:
        """Return a copy of the scope reading from `source`.

        Args:
            source: Object being serialized.

        Returns:
            Self: Scope bound to the source object.
        """
