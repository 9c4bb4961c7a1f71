"""resourcekit package."""

from resourcekit.exceptions import (
    AccessorMissingError,
    DeclarationError,
    DepthExceededError,
    PackageError,
    SelectorError,
    SettingsError,
    ShapeMismatchError,
    UnsupportedTypeError,
)
from resourcekit.json_schema import JsonSchemaGenerator, generate_schema
from resourcekit.logging import configure_logging, get_logger
from resourcekit.parameters import Parameter, Parameters, param
from resourcekit.resource import Resource, enum, field
from resourcekit.serializer import Serializer, serialize
from resourcekit.settings import Settings, get_settings
from resourcekit.typing import (
    WILDCARD,
    ArrayOf,
    Enum,
    Field,
    NullableOf,
    ResourceRef,
    ResourceType,
    ResourceTypeBuilder,
    Scalar,
    ScalarKind,
    Selection,
    Selector,
)

__version__ = "0.1.0"

# Initialize package logger at import time via `get_logger`.
logger = get_logger("resourcekit")

__all__ = [
    "WILDCARD",
    "AccessorMissingError",
    "ArrayOf",
    "DeclarationError",
    "DepthExceededError",
    "Enum",
    "Field",
    "JsonSchemaGenerator",
    "NullableOf",
    "PackageError",
    "Parameter",
    "Parameters",
    "Resource",
    "ResourceRef",
    "ResourceType",
    "ResourceTypeBuilder",
    "Scalar",
    "ScalarKind",
    "Selection",
    "Selector",
    "SelectorError",
    "Serializer",
    "Settings",
    "SettingsError",
    "ShapeMismatchError",
    "UnsupportedTypeError",
    "__version__",
    "configure_logging",
    "enum",
    "field",
    "generate_schema",
    "get_logger",
    "get_settings",
    "logger",
    "param",
    "serialize",
]
