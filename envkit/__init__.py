"""
envkit - dotenv loading, typed environment access and ${VAR|default} expansion.

Example:
    import envkit

    envkit.load(".env")
    port = envkit.get_int_or("PORT", 8080)
    dsn = envkit.expand("${DB_USER|root}@${DB_HOST|DATABASE_HOST|localhost}")
"""

from .environment import Environment, default_environment, lookup, unset
from .errors import ConversionError, EnvError, EnvParseError, RequiredEnvError
from .expand import KeySpec, expand, expand_placeholder, parse_key_spec
from .loader import load, override, parse_stream, read_expanded, read_file
from .model import require_model, unmarshal
from .typed import (
    # Generic
    get_as,
    get_as_or,
    require_as,
    set_as,
    # Strings
    get,
    get_or,
    require,
    set,
    # Integers
    get_int,
    get_int_or,
    require_int,
    set_int,
    get_int64,
    get_int64_or,
    require_int64,
    set_int64,
    get_uint64,
    get_uint64_or,
    require_uint64,
    set_uint64,
    # Floats and booleans
    get_float,
    get_float_or,
    require_float,
    set_float,
    get_bool,
    get_bool_or,
    require_bool,
    set_bool,
    # Lists and JSON
    get_strings,
    get_strings_or,
    require_strings,
    set_strings,
    get_json,
    get_json_or,
    require_json,
    set_json,
)

__all__ = [
    # Environment
    "Environment",
    "default_environment",
    "lookup",
    "unset",
    # Errors
    "EnvError",
    "EnvParseError",
    "ConversionError",
    "RequiredEnvError",
    # Expansion
    "KeySpec",
    "expand",
    "expand_placeholder",
    "parse_key_spec",
    # Loading
    "load",
    "override",
    "parse_stream",
    "read_file",
    "read_expanded",
    # Models
    "unmarshal",
    "require_model",
    # Typed access
    "get_as",
    "get_as_or",
    "require_as",
    "set_as",
    "get",
    "get_or",
    "require",
    # set stays importable as envkit.set but is left out so that
    # "from envkit import *" does not shadow the builtin
    "get_int",
    "get_int_or",
    "require_int",
    "set_int",
    "get_int64",
    "get_int64_or",
    "require_int64",
    "set_int64",
    "get_uint64",
    "get_uint64_or",
    "require_uint64",
    "set_uint64",
    "get_float",
    "get_float_or",
    "require_float",
    "set_float",
    "get_bool",
    "get_bool_or",
    "require_bool",
    "set_bool",
    "get_strings",
    "get_strings_or",
    "require_strings",
    "set_strings",
    "get_json",
    "get_json_or",
    "require_json",
    "set_json",
]
