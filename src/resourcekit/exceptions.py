"""Package exceptions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class PackageError(Exception):
    """Root exception for the package."""


@dataclass(frozen=True)
class SettingsError(PackageError):
    """Raised when settings cannot be loaded or validated."""

    message: str = "Failed to load settings"
    exc: BaseException | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.exc}" if self.exc else self.message


@dataclass(frozen=True)
class DeclarationError(PackageError):
    """Raised when a resource, field or type declaration is invalid."""

    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


@dataclass(frozen=True)
class UnsupportedTypeError(PackageError):
    """Raised when a declared type cannot be classified."""

    type_: Any
    message: str = "Unsupported type"

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.type_!r}"


@dataclass(frozen=True)
class SelectorError(PackageError):
    """Raised when a field selection is malformed or does not match its resource."""

    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


@dataclass(frozen=True)
class AccessorMissingError(PackageError):
    """Raised when a selected field cannot be read from the source object."""

    field_name: str
    resource_name: str
    source_type: str

    def __str__(self) -> str:
        """Return error message payload."""
        return (
            f"Object of type '{self.source_type}' has no value for field "
            f"'{self.field_name}' ({self.resource_name})"
        )


@dataclass(frozen=True)
class ShapeMismatchError(PackageError):
    """Raised when an array field receives a value that is not a sequence."""

    field_name: str
    actual: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Field '{self.field_name}' is declared as an array but got '{self.actual}'"


@dataclass(frozen=True)
class DepthExceededError(PackageError):
    """Raised when resource nesting goes deeper than the configured bound."""

    resource_name: str
    max_depth: int

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Nesting depth exceeded {self.max_depth} while processing '{self.resource_name}'"
