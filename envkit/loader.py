"""
Dotenv file loader.

Reads KEY=value files with python-dotenv's parser and commits the values,
after ${...} expansion, to an Environment. Quoting, comments and `export`
prefixes are handled by python-dotenv; its own variable interpolation is not
used, envkit's expansion is applied instead.
"""

import logging
import os
from typing import IO, Optional, Union

from dotenv.parser import parse_stream as parse_dotenv_stream

from .config import EnvkitConfig
from .environment import Environment, default_environment
from .errors import EnvParseError
from .expand import expand

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def parse_stream(stream: IO[str], path: str = "<stream>") -> dict[str, str]:
    """
    Parse dotenv text into a dict of raw (unexpanded) values.

    Statements without "=" (a bare KEY) are skipped. If a key appears more
    than once, the last value wins. Keys keep file order.

    Args:
        stream: Text stream with dotenv content
        path: Name used in error messages

    Returns:
        Dict mapping key to raw value

    Raises:
        EnvParseError: If a statement cannot be parsed
    """
    values: dict[str, str] = {}
    for binding in parse_dotenv_stream(stream):
        if binding.error:
            raise EnvParseError(path, binding.original.line, binding.original.string)
        if binding.key is None or binding.value is None:
            continue
        values[binding.key] = binding.value
    return values


def read_file(
    path: PathLike, encoding: Optional[str] = None, env: Optional[Environment] = None
) -> dict[str, str]:
    """
    Read and parse a dotenv file.

    Without an explicit encoding, ENVKIT_ENCODING is read from env (default:
    process environment).

    Raises:
        OSError: If the file cannot be opened (e.g. FileNotFoundError)
        EnvParseError: If the file contains an invalid statement
    """
    if encoding is None:
        encoding = EnvkitConfig.encoding(env)

    with open(path, "r", encoding=encoding) as f:
        return parse_stream(f, path=str(path))


def _resolve_paths(paths: tuple[PathLike, ...], env: Environment) -> list[PathLike]:
    if paths:
        return list(paths)
    return list(EnvkitConfig.default_env_files(env))


def load(*paths: PathLike, env: Optional[Environment] = None) -> None:
    """
    Load dotenv files without replacing variables that are already set.

    The set of existing keys is captured before the first file is read: a
    key present then is never touched, while a key introduced by an earlier
    file in the same call may be replaced by a later one. Each value is
    expanded against the environment as it stands when the line is applied.

    Args:
        *paths: Files to load, in order. Defaults to ENVKIT_FILES in env, then .env.
        env: Target environment (default: process environment)

    Raises:
        OSError, EnvParseError: From the first file that fails. Values from
            files loaded before it stay set.
    """
    if env is None:
        env = default_environment()

    existing = frozenset(env.keys())

    for path in _resolve_paths(paths, env):
        logger.info(f"Loading env file: {path}")
        values = read_file(path, env=env)

        applied = 0
        for key, raw in values.items():
            if key in existing:
                logger.debug(f"Keeping existing value for {key}")
                continue
            env.set(key, env.expand(raw))
            applied += 1

        logger.debug(f"Applied {applied} of {len(values)} values from {path}")


def override(*paths: PathLike, env: Optional[Environment] = None) -> None:
    """
    Load dotenv files, replacing any existing values.

    Args:
        *paths: Files to load, in order. Defaults to ENVKIT_FILES in env, then .env.
        env: Target environment (default: process environment)

    Raises:
        OSError, EnvParseError: From the first file that fails. Values from
            files loaded before it stay set.
    """
    if env is None:
        env = default_environment()

    for path in _resolve_paths(paths, env):
        logger.info(f"Loading env file (override): {path}")
        values = read_file(path, env=env)

        for key, raw in values.items():
            env.set(key, env.expand(raw))

        logger.debug(f"Applied {len(values)} values from {path}")


def read_expanded(*paths: PathLike, env: Optional[Environment] = None) -> dict[str, str]:
    """
    Parse and expand dotenv files without touching env.

    Values are expanded against env overlaid with the values read so far,
    the same view override() would produce.
    """
    if env is None:
        env = default_environment()

    view = env.snapshot()
    result: dict[str, str] = {}
    for path in _resolve_paths(paths, env):
        for key, raw in read_file(path, env=env).items():
            value = expand(raw, view)
            view[key] = value
            result[key] = value
    return result

