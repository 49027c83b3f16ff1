"""
Text-related helpers.
"""

from __future__ import annotations

import re

_PACKAGE_NAME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9.]*[A-Za-z0-9]$")
_FIELD_PATTERN = re.compile(r"\s+")


def is_valid_package_name(value: str) -> bool:
    """
    Check whether value can name a workflow package.

    Names start with a letter, contain only ASCII letters, digits and dots,
    do not end with a dot and are at least two characters long.
    """
    return bool(_PACKAGE_NAME_PATTERN.match(value or ""))


def one_line(value: str) -> str:
    """Collapse whitespace so a value fits on a single metadata line."""
    return _FIELD_PATTERN.sub(" ", value or "").strip()


def excerpt(value: str, limit: int = 200) -> str:
    """Shorten a (possibly multi-line) response body for error messages."""
    flattened = one_line(value)
    if len(flattened) <= limit:
        return flattened
    return flattened[: limit - 3].rstrip() + "..."


def r_string(value: str) -> str:
    """Escape value for use inside a double-quoted R string literal."""
    return one_line(value).replace("\\", "\\\\").replace('"', '\\"')
