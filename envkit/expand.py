"""
Variable expansion for ${...} placeholders.

Supported forms:
    ${KEY}                      value of KEY, or "" if KEY is not set
    ${KEY|default}              value of KEY, or "default"
    ${KEY|FALLBACK|...|default} first set key in order, or "default"
    ${KEY|}                     value of KEY, or ""
    ${|default}                 always "default"
    ${KEY\\|SUFFIX|default}     key containing a literal "|"
    ${KEY|default_\\|value}     default containing a literal "|"

A key counts as set when it is present in the mapping, even if its value
is the empty string. Expansion never fails: any placeholder body resolves
to some string.
"""

import os
import re
from dataclasses import dataclass
from typing import Mapping, Optional

PLACEHOLDER_PATTERN = re.compile(r"\$\{([^}]*)\}")

ESCAPED_SEPARATOR = "\\|"
SEPARATOR = "|"


@dataclass(frozen=True)
class KeySpec:
    """
    Parsed placeholder body.

    Attributes:
        keys: Candidate keys, tried in order
        default: Value used when no candidate key is set
        has_default: True when the body contained an unescaped "|"
    """

    keys: tuple[str, ...]
    default: str = ""
    has_default: bool = False

    def resolve(self, env: Mapping[str, str]) -> str:
        """Return the value of the first set key, else the default (or "")."""
        for key in self.keys:
            if key in env:
                return env[key]
        if self.has_default:
            return self.default
        return ""


def _unescape(segment: str) -> str:
    return segment.replace(ESCAPED_SEPARATOR, SEPARATOR)


def parse_key_spec(body: str) -> KeySpec:
    """
    Parse the text between "${" and "}" into a KeySpec.

    Args:
        body: Placeholder body, e.g. "DB_HOST|HOST|localhost"

    Returns:
        KeySpec with candidate keys and default
    """
    body = body.strip()
    has_default = False

    # "${|default}" has no candidate keys at all
    if body.startswith(SEPARATOR):
        has_default = True
        body = body[1:]

    segments = []
    start = 0
    for i, char in enumerate(body):
        if char != SEPARATOR:
            continue
        if i > 0 and body[i - 1] == "\\":
            continue
        segments.append(body[start:i])
        start = i + 1
        has_default = True

    if not has_default:
        return KeySpec(keys=(_unescape(body),))

    return KeySpec(
        keys=tuple(_unescape(segment) for segment in segments),
        default=_unescape(body[start:]),
        has_default=True,
    )


def expand_placeholder(body: str, env: Optional[Mapping[str, str]] = None) -> str:
    """Resolve a single placeholder body against env (default: os.environ)."""
    if env is None:
        env = os.environ
    return parse_key_spec(body).resolve(env)


def expand(template: str, env: Optional[Mapping[str, str]] = None) -> str:
    """
    Replace every ${...} placeholder in template.

    Text outside placeholders, bare $NAME references and an unterminated
    "${" are copied unchanged.

    Args:
        template: String to expand
        env: Mapping to resolve keys against. Defaults to os.environ,
            read at call time.

    Returns:
        Expanded string

    Example:
        expand("${DB_USER|root}@${DB_HOST|localhost}", {"DB_HOST": "db"})
        # -> "root@db"
    """
    if env is None:
        env = os.environ

    def replace_placeholder(match):
        return parse_key_spec(match.group(1)).resolve(env)

    return PLACEHOLDER_PATTERN.sub(replace_placeholder, template)
