"""
Populate pydantic models from environment variables.

Example:
    class DatabaseSettings(BaseModel):
        host: str = "localhost"
        port: int = 5432
        replicas: list[str] = []
        password: str = Field(alias="DB_PASSWORD")

    settings = unmarshal(DatabaseSettings)

Each field reads the variable named by its validation_alias or alias, or the
upper-cased field name (HOST, PORT, REPLICAS). Unset variables are left out so
model defaults apply, and pydantic handles type coercion. Only list, dict and
model fields accept JSON values.
"""

import collections.abc
import json
import types
import typing
from typing import Optional, TypeVar

from pydantic import BaseModel, ValidationError
from pydantic.fields import FieldInfo

from .converters import parse_strings
from .environment import Environment, default_environment
from .errors import RequiredEnvError

ModelT = TypeVar("ModelT", bound=BaseModel)

_SEQUENCE_TYPES = (list, tuple, set, frozenset)
_MAPPING_TYPES = (dict, typing.Mapping, collections.abc.Mapping)


def _input_key(field_name: str, field: FieldInfo) -> str:
    # Key model_validate() expects for this field
    if isinstance(field.validation_alias, str):
        return field.validation_alias
    return field.alias or field_name


def env_name(field_name: str, field: FieldInfo) -> str:
    """
    Environment variable name for a model field.

    A string validation_alias wins over alias; without either the field
    name is upper-cased. AliasPath and AliasChoices are not supported.
    """
    if isinstance(field.validation_alias, str):
        return field.validation_alias
    return field.alias or field_name.upper()


def _is_sequence(annotation) -> bool:
    if annotation in _SEQUENCE_TYPES:
        return True
    origin = typing.get_origin(annotation)
    if origin in _SEQUENCE_TYPES:
        return True
    # Optional[list[str]] and list[str] | None
    if origin is typing.Union or origin is types.UnionType:
        return any(_is_sequence(arg) for arg in typing.get_args(annotation))
    return False


def _is_structured(annotation) -> bool:
    # Sequences, mappings and nested models accept JSON input
    if _is_sequence(annotation):
        return True
    origin = typing.get_origin(annotation)
    if annotation in _MAPPING_TYPES or origin in _MAPPING_TYPES:
        return True
    if origin is None and isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return True
    if origin is typing.Union or origin is types.UnionType:
        return any(_is_structured(arg) for arg in typing.get_args(annotation))
    return False


def _decode(raw: str, field: FieldInfo):
    # Structured values may be given as JSON, e.g. HOSTS=["a","b"]
    stripped = raw.strip()
    if stripped[:1] in ("[", "{") and _is_structured(field.annotation):
        try:
            return json.loads(stripped)
        except ValueError:
            pass
    if _is_sequence(field.annotation):
        return parse_strings(raw)
    return raw


def unmarshal(model_cls: type[ModelT], env: Optional[Environment] = None) -> ModelT:
    """
    Build model_cls from environment variables.

    Raises:
        pydantic.ValidationError: If a value is missing or cannot be coerced
    """
    if env is None:
        env = default_environment()

    data = {}
    for name, field in model_cls.model_fields.items():
        raw = env.lookup(env_name(name, field))
        if raw is None:
            continue
        data[_input_key(name, field)] = _decode(raw, field)

    return model_cls.model_validate(data)


def require_model(model_cls: type[ModelT], env: Optional[Environment] = None) -> ModelT:
    """
    Like unmarshal(), but report failures as RequiredEnvError.

    Raises:
        RequiredEnvError: Naming the variables that are missing or invalid
    """
    try:
        return unmarshal(model_cls, env)
    except ValidationError as e:
        names = []
        for error in e.errors():
            loc = error.get("loc") or ()
            if not loc:
                continue
            field_key = str(loc[0])
            field_name = next(
                (n for n, f in model_cls.model_fields.items() if _input_key(n, f) == field_key),
                field_key,
            )
            field = model_cls.model_fields.get(field_name)
            names.append(env_name(field_name, field) if field else field_key)
        key = ", ".join(dict.fromkeys(names)) or model_cls.__name__
        raise RequiredEnvError(key, str(e)) from e
