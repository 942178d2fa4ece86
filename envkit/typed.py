"""
Typed access to environment variables.

Three flavours of getter exist for every type:

    get_X(key)              convert the raw value ("" when unset); the
                            converter's exception propagates unchanged
    get_X_or(key, default)  default when unset; ConversionError (carrying
                            the default) when set but invalid
    require_X(key)          RequiredEnvError when unset or invalid, for
                            configuration that must be present at startup

Setters (set_X) format the value and write it through immediately.
All functions take an optional Environment and use the process
environment when it is omitted.
"""

from functools import partial
from typing import Any, Callable, Optional, TypeVar

from . import converters
from .environment import Environment, default_environment
from .errors import ConversionError, RequiredEnvError

T = TypeVar("T")

Converter = Callable[[str], T]


def _environment(env: Optional[Environment]) -> Environment:
    if env is None:
        return default_environment()
    return env


# ============================================================================
# Generic accessors
# ============================================================================


def get_as(key: str, convert: Converter[T], env: Optional[Environment] = None) -> T:
    """
    Convert the value of key with convert.

    An unset key is converted as "". Errors raised by convert are not caught.
    """
    return convert(_environment(env).get(key))


def get_as_or(key: str, convert: Converter[T], default: T, env: Optional[Environment] = None) -> T:
    """
    Convert the value of key, falling back to default when key is unset.

    convert is not called for an unset key.

    Raises:
        ConversionError: If the key is set but convert fails. The exception
            carries the default as ``.default`` and the original error as
            ``.error`` so the caller can decide whether to continue.
    """
    raw = _environment(env).lookup(key)
    if raw is None:
        return default
    try:
        return convert(raw)
    except Exception as e:
        raise ConversionError(key, raw, default, e) from e


def require_as(key: str, convert: Converter[T], env: Optional[Environment] = None) -> T:
    """
    Convert the value of key, treating a missing or invalid value as fatal.

    Raises:
        RequiredEnvError: If key is unset or convert fails
    """
    raw = _environment(env).lookup(key)
    if raw is None:
        raise RequiredEnvError(key)
    try:
        return convert(raw)
    except Exception as e:
        raise RequiredEnvError(key, str(e)) from e


def set_as(key: str, value: T, formatter: Callable[[T], str], env: Optional[Environment] = None) -> None:
    """Format value and store it under key."""
    _environment(env).set(key, formatter(value))


# ============================================================================
# Strings
# ============================================================================


def get(key: str, env: Optional[Environment] = None) -> str:
    return _environment(env).get(key)


def get_or(key: str, default: str, env: Optional[Environment] = None) -> str:
    return _environment(env).get_or(key, default)


def require(key: str, env: Optional[Environment] = None) -> str:
    return require_as(key, str, env)


def set(key: str, value: str, env: Optional[Environment] = None) -> None:
    _environment(env).set(key, value)


# ============================================================================
# Integers
# ============================================================================


def get_int(key: str, env: Optional[Environment] = None) -> int:
    return get_as(key, converters.parse_int, env)


def get_int_or(key: str, default: int, env: Optional[Environment] = None) -> int:
    return get_as_or(key, converters.parse_int, default, env)


def require_int(key: str, env: Optional[Environment] = None) -> int:
    return require_as(key, converters.parse_int, env)


def set_int(key: str, value: int, env: Optional[Environment] = None) -> None:
    set_as(key, value, converters.format_int, env)


def get_int64(key: str, env: Optional[Environment] = None) -> int:
    return get_as(key, converters.parse_int64, env)


def get_int64_or(key: str, default: int, env: Optional[Environment] = None) -> int:
    return get_as_or(key, converters.parse_int64, default, env)


def require_int64(key: str, env: Optional[Environment] = None) -> int:
    return require_as(key, converters.parse_int64, env)


def set_int64(key: str, value: int, env: Optional[Environment] = None) -> None:
    set_as(key, value, converters.format_int64, env)


def get_uint64(key: str, env: Optional[Environment] = None) -> int:
    return get_as(key, converters.parse_uint64, env)


def get_uint64_or(key: str, default: int, env: Optional[Environment] = None) -> int:
    return get_as_or(key, converters.parse_uint64, default, env)


def require_uint64(key: str, env: Optional[Environment] = None) -> int:
    return require_as(key, converters.parse_uint64, env)


def set_uint64(key: str, value: int, env: Optional[Environment] = None) -> None:
    set_as(key, value, converters.format_uint64, env)


# ============================================================================
# Floats and booleans
# ============================================================================


def get_float(key: str, env: Optional[Environment] = None) -> float:
    return get_as(key, converters.parse_float, env)


def get_float_or(key: str, default: float, env: Optional[Environment] = None) -> float:
    return get_as_or(key, converters.parse_float, default, env)


def require_float(key: str, env: Optional[Environment] = None) -> float:
    return require_as(key, converters.parse_float, env)


def set_float(key: str, value: float, env: Optional[Environment] = None) -> None:
    set_as(key, value, converters.format_float, env)


def get_bool(key: str, env: Optional[Environment] = None) -> bool:
    return get_as(key, converters.parse_bool, env)


def get_bool_or(key: str, default: bool, env: Optional[Environment] = None) -> bool:
    return get_as_or(key, converters.parse_bool, default, env)


def require_bool(key: str, env: Optional[Environment] = None) -> bool:
    return require_as(key, converters.parse_bool, env)


def set_bool(key: str, value: bool, env: Optional[Environment] = None) -> None:
    set_as(key, value, converters.format_bool, env)


# ============================================================================
# Comma-delimited string lists
# ============================================================================


def get_strings(key: str, env: Optional[Environment] = None) -> list[str]:
    return get_as(key, converters.parse_strings, env)


def get_strings_or(key: str, default: list[str], env: Optional[Environment] = None) -> list[str]:
    return get_as_or(key, converters.parse_strings, default, env)


def require_strings(key: str, env: Optional[Environment] = None) -> list[str]:
    return require_as(key, converters.parse_strings, env)


def set_strings(key: str, value: list[str], env: Optional[Environment] = None) -> None:
    set_as(key, value, converters.format_strings, env)


# ============================================================================
# JSON
# ============================================================================


def get_json(key: str, type_: Optional[Any] = None, env: Optional[Environment] = None) -> Any:
    """Decode the JSON value of key, validated into type_ when given."""
    return get_as(key, partial(converters.parse_json, type_=type_), env)


def get_json_or(key: str, default: Any, type_: Optional[Any] = None, env: Optional[Environment] = None) -> Any:
    return get_as_or(key, partial(converters.parse_json, type_=type_), default, env)


def require_json(key: str, type_: Optional[Any] = None, env: Optional[Environment] = None) -> Any:
    return require_as(key, partial(converters.parse_json, type_=type_), env)


def set_json(key: str, value: Any, env: Optional[Environment] = None) -> None:
    set_as(key, value, converters.format_json, env)
