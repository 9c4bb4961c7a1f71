from __future__ import annotations

import pytest

from resourcekit.exceptions import DeclarationError
from resourcekit.parameters import Parameter, Parameters, param
from resourcekit.resource import enum
from resourcekit.typing.enums import ParameterLocation


class CreateRestaurantParameters(Parameters):
    params = (
        param("id", int, location="path"),
        param("name", str, location="body"),
        param("address", str, location="body", optional=True, null=True),
        param("genre", enum("Sushi", "Ramen"), location="body", description="genre of food", example="Sushi"),
    )


class PaginationParameters(Parameters):
    params = (param("page", int), param("per_page", int))


class PaginationWithDefaultParameters(Parameters):
    params = (param("page", int, default=1), param("per_page", int, default=20))


def test_to_openapi() -> None:
    assert CreateRestaurantParameters.to_openapi() == [
        {"name": "id", "schema": {"type": "integer"}, "in": "path", "required": True},
        {"name": "name", "schema": {"type": "string"}, "in": "body", "required": True},
        {"name": "address", "schema": {"type": "string", "nullable": True}, "in": "body", "required": False},
        {
            "name": "genre",
            "schema": {"type": "string", "enum": ["Sushi", "Ramen"]},
            "in": "body",
            "required": True,
            "description": "genre of food",
            "example": "Sushi",
        },
    ]


def test_path_parameter_is_always_required() -> None:
    parameter = param("id?", int, location=ParameterLocation.PATH)

    assert parameter.field.optional is True
    assert parameter.required is True


def test_query_is_default_location() -> None:
    parameter = param("q", str)

    assert isinstance(parameter, Parameter)
    assert parameter.location is ParameterLocation.QUERY
    assert parameter.to_openapi()["in"] == "query"


def test_getters_return_values() -> None:
    params = PaginationParameters({"page": 1, "per_page": 20})

    assert params.page == 1
    assert params.per_page == 20


def test_getters_return_none_for_missing_values() -> None:
    assert PaginationParameters({}).page is None


def test_unknown_attribute_raises() -> None:
    with pytest.raises(AttributeError):
        _ = PaginationParameters({"page": 1}).offset


def test_to_dict_keeps_declared_parameters() -> None:
    assert PaginationParameters({"page": 1, "per_page": 20}).to_dict() == {"page": 1, "per_page": 20}
    assert PaginationParameters({"page": 1, "per_page": 20, "foo": "bar"}).to_dict() == {"page": 1, "per_page": 20}
    assert PaginationParameters({"per_page": None}).to_dict() == {"per_page": None}


def test_defaults_replace_missing_values() -> None:
    params = PaginationWithDefaultParameters({"page": 2, "per_page": None})

    assert params.page == 2
    assert params.per_page == 20
    assert PaginationWithDefaultParameters({}).get("page") == 1


def test_duplicate_parameter_is_rejected() -> None:
    with pytest.raises(DeclarationError, match="declared twice"):

        class _Broken(Parameters):
            params = (param("page", int), param("page", int))


@pytest.mark.parametrize("name", ["data", "get", "to_dict"])
def test_reserved_parameter_names(name: str) -> None:
    with pytest.raises(DeclarationError, match="reserved"):

        class _Broken(Parameters):
            params = (param(name, str),)


def test_openapi_options_are_copied_per_call() -> None:
    parameter = param("tags", [str], examples=[["red"]])

    first = parameter.to_openapi()
    first["examples"].append(["blue"])

    assert parameter.to_openapi()["examples"] == [["red"]]
