from typing import Any, Dict, List, Optional
import math
import re

from clientes_api.core.exceptions import ClienteNotFoundError, ClienteValidationError

# In-memory operations over a loaded collection. No I/O happens here;
# callers load and save through the repository.

REQUIRED_FIELD = "nombre"

_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")


def _as_id(value: Any) -> Optional[int]:
    # Integral floats such as 2.0 count as ids; booleans never do.
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return None


def is_finite_json(value: Any) -> bool:
    """False when a NaN or Infinity is nested anywhere in ``value``."""
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, dict):
        return all(is_finite_json(v) for v in value.values())
    if isinstance(value, list):
        return all(is_finite_json(v) for v in value)
    return True


def next_id(clientes: List[Dict[str, Any]]) -> int:
    """Highest integer id in the collection plus one, or 1 if there is none."""
    ids = [c.get("id") for c in clientes if isinstance(c, dict)]
    return max((i for i in map(_as_id, ids) if i is not None), default=0) + 1


def parse_id(raw: str) -> Optional[int]:
    """
    Read the leading integer of a path segment, ``parseInt`` style:
    ``"12"`` and ``"12abc"`` both give 12. Returns None when the segment
    does not start with a number; None matches no cliente.
    """
    match = _LEADING_INT.match(raw or "")
    if not match:
        return None
    return int(match.group(1))


def validate_cliente(data: Any):
    if not isinstance(data, dict) or not data.get(REQUIRED_FIELD):
        raise ClienteValidationError(REQUIRED_FIELD)


def add_cliente(clientes: List[Dict[str, Any]], data: Dict[str, Any]) -> Dict[str, Any]:
    validate_cliente(data)
    nuevo = dict(data)
    nuevo["id"] = next_id(clientes)
    clientes.append(nuevo)
    return nuevo


def find_index(clientes: List[Dict[str, Any]], cliente_id: Optional[int]) -> int:
    if cliente_id is None:
        return -1
    for index, cliente in enumerate(clientes):
        if not isinstance(cliente, dict):
            continue
        if _as_id(cliente.get("id")) == cliente_id:
            return index
    return -1


def find_cliente(clientes: List[Dict[str, Any]], cliente_id: Optional[int]) -> Dict[str, Any]:
    index = find_index(clientes, cliente_id)
    if index == -1:
        raise ClienteNotFoundError(cliente_id)
    return clientes[index]


def remove_cliente(clientes: List[Dict[str, Any]], cliente_id: Optional[int]) -> Dict[str, Any]:
    index = find_index(clientes, cliente_id)
    if index == -1:
        raise ClienteNotFoundError(cliente_id)
    return clientes.pop(index)
