"""
envkit's own settings.

Environment variables:
- ENVKIT_FILES: Comma-separated dotenv files loaded by default (default: .env)
- ENVKIT_ENCODING: Encoding used to read dotenv files (default: utf-8)
- ENVKIT_LOG_LEVEL: Log level for the envkit command line (default: WARNING)
"""

import logging
from typing import Optional

from . import typed
from .environment import Environment

DEFAULT_ENV_FILE = ".env"
DEFAULT_ENCODING = "utf-8"
DEFAULT_LOG_LEVEL = "WARNING"

logger = logging.getLogger(__name__)


class EnvkitConfig:
    """Central location for envkit settings."""

    @staticmethod
    def default_env_files(env: Optional[Environment] = None) -> list[str]:
        """Files loaded when load()/override() are called without paths."""
        files = [f for f in typed.get_strings_or("ENVKIT_FILES", [DEFAULT_ENV_FILE], env) if f]
        return files or [DEFAULT_ENV_FILE]

    @staticmethod
    def encoding(env: Optional[Environment] = None) -> str:
        return typed.get_or("ENVKIT_ENCODING", DEFAULT_ENCODING, env) or DEFAULT_ENCODING

    @staticmethod
    def log_level(env: Optional[Environment] = None) -> int:
        """
        Resolve ENVKIT_LOG_LEVEL to a logging level.

        Unknown names fall back to WARNING.
        """
        name = typed.get_or("ENVKIT_LOG_LEVEL", DEFAULT_LOG_LEVEL, env).strip().upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            logger.warning(f"Unknown ENVKIT_LOG_LEVEL {name!r}, using {DEFAULT_LOG_LEVEL}")
            return logging.WARNING
        return level
