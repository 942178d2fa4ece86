"""
String converters for typed environment access.

parse_* functions turn a raw environment string into a value and raise
ValueError (or a subclass such as json.JSONDecodeError or
pydantic.ValidationError) when the string is not valid. format_* functions
do the reverse for the setters.
"""

import json
import re
from typing import Any, Optional

from pydantic import TypeAdapter
from pydantic_core import to_json

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
UINT64_MAX = 2**64 - 1

_SIGNED_PATTERN = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_PATTERN = re.compile(r"[0-9]+")

_TRUE_VALUES = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_VALUES = {"0", "f", "F", "FALSE", "false", "False"}

LIST_SEPARATOR = ","


def _check_int(value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected int, got {type(value).__name__}")


def parse_int(value: str) -> int:
    """Parse a base-10 signed 64-bit integer ("42", "-7", "+3")."""
    if not _SIGNED_PATTERN.fullmatch(value):
        raise ValueError(f"invalid integer: {value!r}")
    number = int(value)
    if not INT64_MIN <= number <= INT64_MAX:
        raise ValueError(f"integer out of range: {value!r}")
    return number


def parse_int64(value: str) -> int:
    return parse_int(value)


def parse_uint64(value: str) -> int:
    """Parse a base-10 unsigned 64-bit integer (no sign allowed)."""
    if not _UNSIGNED_PATTERN.fullmatch(value):
        raise ValueError(f"invalid unsigned integer: {value!r}")
    number = int(value)
    if number > UINT64_MAX:
        raise ValueError(f"unsigned integer out of range: {value!r}")
    return number


def parse_float(value: str) -> float:
    # float() would also accept padding and digit separators
    if value != value.strip() or "_" in value:
        raise ValueError(f"invalid float: {value!r}")
    return float(value)


def parse_bool(value: str) -> bool:
    """Parse 1/t/T/TRUE/true/True or 0/f/F/FALSE/false/False."""
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"invalid boolean: {value!r}")


def parse_strings(value: str) -> list[str]:
    """
    Split a comma-delimited list.

    Elements are not trimmed and commas cannot be escaped, so "a, b" gives
    ["a", " b"] and "" gives [""].
    """
    return value.split(LIST_SEPARATOR)


def parse_json(value: str, type_: Optional[Any] = None) -> Any:
    """
    Decode a JSON value.

    Args:
        value: JSON text
        type_: Optional type to validate into (e.g. dict[str, int] or a
            pydantic model). Without it, plain json.loads is used.
    """
    if type_ is None:
        return json.loads(value)
    return TypeAdapter(type_).validate_json(value)


def format_int(value: int) -> str:
    _check_int(value)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f"integer out of range: {value}")
    return str(value)


def format_int64(value: int) -> str:
    return format_int(value)


def format_uint64(value: int) -> str:
    _check_int(value)
    if not 0 <= value <= UINT64_MAX:
        raise ValueError(f"unsigned integer out of range: {value}")
    return str(value)


def format_float(value: float) -> str:
    # repr gives the shortest string that parses back to the same float
    return repr(float(value))


def format_bool(value: bool) -> str:
    return "true" if value else "false"


def format_strings(value: list[str]) -> str:
    return LIST_SEPARATOR.join(value)


def format_json(value: Any) -> str:
    """
    Encode value as compact JSON (no whitespace between tokens).

    pydantic models are serialized wherever they appear, including inside
    lists and dicts.

    Raises:
        pydantic_core.PydanticSerializationError: If value cannot be encoded
    """
    return to_json(value).decode()
