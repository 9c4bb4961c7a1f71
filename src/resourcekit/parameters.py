"""HTTP parameter declarations and binding."""

from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Any, ClassVar

import pydantic
from pydantic import BaseModel, ConfigDict

from resourcekit.exceptions import DeclarationError
from resourcekit.json_schema import JsonSchema, JsonSchemaGenerator
from resourcekit.typing.enums import ParameterLocation
from resourcekit.typing.models import Field


class Parameter(BaseModel):
    """One declared request parameter."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    field: Field
    location: ParameterLocation = ParameterLocation.QUERY
    default: Any = None
    options: dict[str, Any] = pydantic.Field(default_factory=dict)

    @property
    def name(self) -> str:
        """Parameter name."""
        return self.field.name

    @property
    def required(self) -> bool:
        """Path parameters are always required; others unless declared optional."""
        if self.location == ParameterLocation.PATH:
            return True
        return not self.field.optional

    def to_openapi(self) -> dict[str, Any]:
        """Build the OpenAPI parameter object.

        Returns:
            dict[str, Any]: `name`, `schema`, `in` and `required`, followed by the extra options.
        """
        schema: JsonSchema = JsonSchemaGenerator(openapi=True).field_schema(self.field)
        return {
            "name": self.name,
            "schema": schema,
            "in": self.location.value,
            "required": self.required,
            **copy.deepcopy(self.options),
        }


def param(
    name: str,
    type_: Any,
    *,
    location: ParameterLocation | str = ParameterLocation.QUERY,
    null: bool = False,
    optional: bool = False,
    default: Any = None,
    **options: Any,
) -> Parameter:
    """Declare a request parameter.

    Args:
        name (str): Parameter name; a trailing `?` marks it optional.
        type_ (Any): Type declaration accepted by `to_type`.
        location (ParameterLocation | str): `path`, `query` or `body`.
        null (bool): Whether the value may be null.
        optional (bool): Whether the parameter may be omitted.
        default (Any): Value returned when the bound value is `None` or `False`.
        **options (Any): Extra OpenAPI parameter keywords, e.g. `description`.

    Returns:
        Parameter: Parameter declaration.
    """
    return Parameter(
        field=Field(name=name, type=type_, nullable=null, optional=optional),
        location=location,
        default=default,
        options=options,
    )


class Parameters:
    """Base class for declared parameter sets.

    Subclasses list their parameters in `params`. Instances wrap the raw request values and
    expose each declared parameter as an attribute.

    Example:
        class PaginationParameters(Parameters):
            params = (param("page", int, default=1), param("per_page", int, default=20))

        PaginationParameters({"page": 2}).per_page  # 20
    """

    params: ClassVar[Sequence[Parameter]] = ()
    parameters: ClassVar[Mapping[str, Parameter]] = MappingProxyType({})

    def __init_subclass__(cls, **kwargs: Any) -> None:
        """Index declared parameters by name."""
        super().__init_subclass__(**kwargs)
        indexed: dict[str, Parameter] = {}
        for parameter in cls.params:
            if parameter.name in indexed:
                raise DeclarationError(message=f"Parameter '{parameter.name}' is declared twice in '{cls.__name__}'")
            if parameter.name == "data" or hasattr(Parameters, parameter.name):
                raise DeclarationError(message=f"Parameter name '{parameter.name}' is reserved")
            indexed[parameter.name] = parameter
        cls.parameters = MappingProxyType(indexed)

    def __init__(self, data: Mapping[str, Any]) -> None:
        self.data = data

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_") or name not in type(self).parameters:
            raise AttributeError(f"{type(self).__name__!r} has no parameter {name!r}")
        return self.get(name)

    @classmethod
    def to_openapi(cls) -> list[dict[str, Any]]:
        """Build the OpenAPI parameter objects, in declaration order."""
        return [parameter.to_openapi() for parameter in cls.parameters.values()]

    def get(self, name: str) -> Any:
        """Return the bound value of a parameter, or its default when the value is blank.

        Args:
            name (str): Declared parameter name.

        Raises:
            KeyError: If the parameter is not declared.

        Returns:
            Any: Bound value or default.
        """
        parameter = type(self).parameters[name]
        value = self.data.get(name)
        if (value is None or value is False) and parameter.default is not None:
            return parameter.default
        return value

    def to_dict(self) -> dict[str, Any]:
        """Return the raw values of declared parameters present in the input."""
        return {name: self.data[name] for name in type(self).parameters if name in self.data}
