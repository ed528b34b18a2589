import pytest

from clientes_api.core.clientes import (
    add_cliente,
    find_cliente,
    find_index,
    is_finite_json,
    next_id,
    parse_id,
    remove_cliente,
    validate_cliente,
)
from clientes_api.core.exceptions import ClienteNotFoundError, ClienteValidationError


def test_next_id():
    assert next_id([]) == 1
    assert next_id([{"id": 1}, {"id": 5}, {"id": 3}]) == 6
    # Records without a usable integer id are ignored
    assert next_id([{"nombre": "x"}, {"id": "9"}, {"id": True}, {"id": 2}]) == 3
    assert next_id([{"id": 4.0}, {"id": 2}]) == 5
    assert next_id([{"id": 4.5}, {"id": float("nan")}]) == 1


@pytest.mark.parametrize("raw, expected", [
    ("1", 1),
    ("42", 42),
    ("  7", 7),
    ("+3", 3),
    ("-2", -2),
    ("12abc", 12),
    ("3.9", 3),
    ("abc", None),
    ("", None),
    ("-", None),
    ("\u0663", None),
    ("1\u0663", 1),
])
def test_parse_id(raw, expected):
    assert parse_id(raw) == expected


@pytest.mark.parametrize("data", [
    {},
    {"nombre": ""},
    {"nombre": None},
    {"nombre": 0},
    {"nombre": False},
    ["nombre"],
    "Ana",
    None,
])
def test_validate_rejects_missing_nombre(data):
    with pytest.raises(ClienteValidationError) as excinfo:
        validate_cliente(data)
    assert str(excinfo.value) == "Falta el campo 'nombre'"


def test_add_cliente_copies_and_appends():
    clientes = [{"id": 4, "nombre": "Ana"}]
    data = {"nombre": "Leo", "ciudad": "Lima"}

    nuevo = add_cliente(clientes, data)

    assert nuevo == {"nombre": "Leo", "ciudad": "Lima", "id": 5}
    assert clientes[-1] is nuevo
    assert "id" not in data


def test_add_cliente_validates_before_mutating():
    clientes = []
    with pytest.raises(ClienteValidationError):
        add_cliente(clientes, {"ciudad": "Lima"})
    assert clientes == []


def test_find_index_uses_strict_integer_match():
    clientes = [{"id": "1"}, {"id": True}, {"nombre": "sin id"}, {"id": 1}]

    assert find_index(clientes, 1) == 3
    assert find_index(clientes, None) == -1
    assert find_index(clientes, 2) == -1
    assert find_index([{"id": 2.5}, {"id": 2.0}], 2) == 1


def test_find_and_remove():
    clientes = [{"id": 1, "nombre": "Ana"}, {"id": 2, "nombre": "Leo"}]

    assert find_cliente(clientes, 2) == {"id": 2, "nombre": "Leo"}
    assert remove_cliente(clientes, 1) == {"id": 1, "nombre": "Ana"}
    assert clientes == [{"id": 2, "nombre": "Leo"}]

    with pytest.raises(ClienteNotFoundError):
        find_cliente(clientes, 1)
    with pytest.raises(ClienteNotFoundError):
        remove_cliente(clientes, None)
    assert len(clientes) == 1


def test_is_finite_json():
    assert is_finite_json({"nombre": "Ana", "saldo": 10.5, "tags": ["a", 1]})
    assert not is_finite_json({"nombre": "Ana", "saldo": float("nan")})
    assert not is_finite_json({"nombre": "Ana", "extra": {"limites": [1, float("inf")]}})
