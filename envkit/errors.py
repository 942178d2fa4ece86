"""
envkit exceptions.

File read errors (missing file, permission denied) are not wrapped: they
surface as the builtin OSError raised by open().
"""

from typing import Any, Optional


class EnvError(Exception):
    """Base exception for envkit errors"""

    pass


class EnvParseError(EnvError):
    """A dotenv statement could not be parsed"""

    def __init__(self, path: str, line: int, statement: str):
        super().__init__(f"{path}:{line}: unable to parse statement: {statement.strip()!r}")
        self.path = path
        self.line = line
        self.statement = statement


class ConversionError(EnvError, ValueError):
    """
    A set variable could not be converted and the default was used instead.

    Raised by the ``get_*_or`` accessors. ``default`` holds the value the
    caller asked to fall back to, ``error`` the converter's own exception
    (also chained as ``__cause__``).
    """

    def __init__(self, key: str, value: str, default: Any, error: Exception):
        super().__init__(f"Invalid value for {key}: {error}")
        self.key = key
        self.value = value
        self.default = default
        self.error = error


class RequiredEnvError(EnvError):
    """A required variable is missing or invalid"""

    def __init__(self, key: str, reason: Optional[str] = None):
        if reason is None:
            reason = "not set"
        super().__init__(f"Required environment variable {key}: {reason}")
        self.key = key
