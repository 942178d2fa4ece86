"""
Environment accessor.

Thin string-level access to a mutable key/value store, by default the
process environment (os.environ). Keys are case-sensitive, values are
strings. No locking is done: callers mutating the environment from several
threads must synchronise themselves.
"""

import os
from typing import MutableMapping, Optional

from .expand import expand


class Environment:
    """
    String get/set over an environment mapping.

    Example:
        env = Environment({"HOST": "localhost"})
        env.get("HOST")        # "localhost"
        env.get("MISSING")     # ""
        env.lookup("MISSING")  # None
    """

    def __init__(self, store: Optional[MutableMapping[str, str]] = None):
        self._store = os.environ if store is None else store

    @property
    def store(self) -> MutableMapping[str, str]:
        return self._store

    def get(self, key: str) -> str:
        """Return the value of key, or "" if it is not set."""
        return self._store.get(key, "")

    def get_or(self, key: str, default: str) -> str:
        """Return the value of key, or default if it is not set."""
        value = self.lookup(key)
        if value is None:
            return default
        return value

    def lookup(self, key: str) -> Optional[str]:
        """Return the value of key, or None if it is not set (an empty value is set)."""
        if key in self._store:
            return self._store[key]
        return None

    def contains(self, key: str) -> bool:
        return key in self._store

    def __contains__(self, key: str) -> bool:
        return self.contains(key)

    def set(self, key: str, value: str) -> None:
        """
        Set key to value.

        Raises:
            TypeError: If value is not a string
        """
        if not isinstance(value, str):
            raise TypeError(f"Environment value for {key} must be str, got {type(value).__name__}")
        self._store[key] = value

    def unset(self, key: str) -> None:
        """Remove key. Removing a key that is not set is a no-op."""
        self._store.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._store.keys())

    def snapshot(self) -> dict[str, str]:
        """Return a plain dict copy of the current environment."""
        return dict(self._store)

    def expand(self, template: str) -> str:
        """Expand ${...} placeholders against this environment."""
        return expand(template, self._store)


_default_environment = Environment()


def default_environment() -> Environment:
    """Return the Environment bound to os.environ."""
    return _default_environment


def lookup(key: str) -> Optional[str]:
    return _default_environment.lookup(key)


def unset(key: str) -> None:
    _default_environment.unset(key)
