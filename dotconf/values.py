# dotconf/values.py
"""
dotconf.values
--------------

Type predicates and coercions for configuration values.

A stored value is one of ``str``, ``bool``, ``int``, ``float``, ``list``,
``dict`` or ``None``. ``bool`` subclasses ``int`` in Python, so every predicate
here checks the exact type instead of using ``isinstance``: ``True`` is a
boolean and never an integer.

Python has a single ``int`` type; the 32-bit *int* and 64-bit *long* kinds are
told apart by range. The *short*, *byte*, *character* and *float* kinds are only
used as list element kinds.
"""

import math
from typing import Any, Callable, Dict

from .exceptions import ConversionError

INT32_MIN, INT32_MAX = -(2 ** 31), 2 ** 31 - 1
INT64_MIN, INT64_MAX = -(2 ** 63), 2 ** 63 - 1
INT16_MIN, INT16_MAX = -(2 ** 15), 2 ** 15 - 1
FLOAT32_MAX = 3.4028234663852886e38


def _is_integer(value: Any) -> bool:
    return type(value) is int


def is_string(value: Any) -> bool:
    return type(value) is str


def is_boolean(value: Any) -> bool:
    return type(value) is bool


def is_int(value: Any) -> bool:
    """True for an ``int`` (not ``bool``) within the signed 32-bit range."""
    return _is_integer(value) and INT32_MIN <= value <= INT32_MAX


def is_long(value: Any) -> bool:
    """True for an ``int`` (not ``bool``) within the signed 64-bit range."""
    return _is_integer(value) and INT64_MIN <= value <= INT64_MAX


def is_double(value: Any) -> bool:
    return type(value) is float


def is_list(value: Any) -> bool:
    return isinstance(value, list)


def is_mapping(value: Any) -> bool:
    return isinstance(value, dict)


def is_short(value: Any) -> bool:
    return _is_integer(value) and INT16_MIN <= value <= INT16_MAX


def is_byte(value: Any) -> bool:
    return _is_integer(value) and 0 <= value <= 255


def is_character(value: Any) -> bool:
    return is_string(value) and len(value) == 1


def is_float(value: Any) -> bool:
    """True for a ``float`` representable in single precision (or non-finite)."""
    return is_double(value) and (not math.isfinite(value) or abs(value) <= FLOAT32_MAX)


#: Element predicates by name, used by ``get_list(path, item_type=...)``.
ITEM_PREDICATES: Dict[Any, Callable[[Any], bool]] = {
    "string": is_string,
    "bool": is_boolean,
    "int": is_int,
    "long": is_long,
    "double": is_double,
    "float": is_float,
    "short": is_short,
    "byte": is_byte,
    "char": is_character,
    "map": is_mapping,
    "list": is_list,
    str: is_string,
    bool: is_boolean,
    int: is_long,
    float: is_double,
    dict: is_mapping,
    list: is_list,
}


def item_predicate(item_type: Any) -> Callable[[Any], bool]:
    """
    Look up the element predicate for `item_type`.

    `item_type` may be a kind name (``"int"``, ``"char"``, ...), one of the
    builtin types ``str``/``bool``/``int``/``float``/``dict``/``list``, or a
    callable predicate which is returned unchanged.

    Raises:
        ValueError: If `item_type` is neither a known kind nor callable.
    """
    try:
        return ITEM_PREDICATES[item_type]
    except (KeyError, TypeError):
        if callable(item_type):
            return item_type
        raise ValueError(f"Unknown list item type: {item_type!r}") from None


def all_items(values: list, predicate: Callable[[Any], bool]) -> bool:
    """True if every element of `values` satisfies `predicate` (vacuously for [])."""
    return all(predicate(item) for item in values)


# --- Converting coercions ---
# Used by the single-argument getters. None converts to the zero value.

def _to_integer(value: Any, path: str, target: str, low: int, high: int) -> int:
    if value is None:
        return 0
    if type(value) is bool:
        return int(value)
    if _is_integer(value):
        result = value
    elif type(value) is float:
        if not math.isfinite(value):
            raise ConversionError(path, value, target)
        result = round(value)  # half-to-even
    elif type(value) is str:
        try:
            result = int(value.strip(), 10)
        except ValueError:
            raise ConversionError(path, value, target) from None
    else:
        raise ConversionError(path, value, target)

    if not low <= result <= high:
        raise ConversionError(path, value, target)
    return result


def to_int(value: Any, path: str = "") -> int:
    return _to_integer(value, path, "int", INT32_MIN, INT32_MAX)


def to_long(value: Any, path: str = "") -> int:
    return _to_integer(value, path, "long", INT64_MIN, INT64_MAX)


def to_double(value: Any, path: str = "") -> float:
    if value is None:
        return 0.0
    if type(value) in (bool, int, float):
        try:
            return float(value)
        except OverflowError:
            raise ConversionError(path, value, "double") from None
    if type(value) is str:
        try:
            return float(value.strip())
        except ValueError:
            raise ConversionError(path, value, "double") from None
    raise ConversionError(path, value, "double")


def to_boolean(value: Any, path: str = "") -> bool:
    if value is None:
        return False
    if type(value) is bool:
        return value
    if type(value) in (int, float):
        return value != 0
    if type(value) is str:
        lowered = value.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    raise ConversionError(path, value, "bool")
