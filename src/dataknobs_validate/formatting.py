"""Human-readable rendering of values for default failure messages.
"""

from __future__ import annotations

import json
import re
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any

from .context import UNSET

_REGEX_FLAGS = (
    (re.ASCII, "a"),
    (re.IGNORECASE, "i"),
    (re.LOCALE, "L"),
    (re.MULTILINE, "m"),
    (re.DOTALL, "s"),
    (re.VERBOSE, "x"),
)


def format_value(value: Any) -> str:
    """Render a value as short, readable text.

    Only used to build messages; errors keep the original values.

    Args:
        value: Any value

    Returns:
        Text rendering of the value
    """
    if value is None:
        return "None"
    if value is UNSET:
        return "UNSET"
    if isinstance(value, str):
        return value
    if isinstance(value, Enum):
        return str(value)
    if isinstance(value, (bool, int, float, complex, Decimal, Fraction)):
        return str(value)
    if isinstance(value, re.Pattern):
        return _format_pattern(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (dict, list, tuple)):
        return _format_structure(value, set())
    if callable(value):
        name = getattr(value, "__name__", "")
        if not name or name == "<lambda>":
            return "[Function]"
        return f"[Function: {name}]"

    return f"[object {type(value).__name__}]"


def _format_pattern(pattern: re.Pattern) -> str:
    # Implicit UNICODE flag on str patterns is noise
    flags = "".join(letter for flag, letter in _REGEX_FLAGS if pattern.flags & flag)
    source = pattern.pattern if isinstance(pattern.pattern, str) else repr(pattern.pattern)
    return f"/{source}/{flags}"


def _format_structure(value: Any, seen: set[int]) -> str:
    """Render dicts, lists and tuples as compact JSON-like text.

    Keys that JSON cannot hold are rendered with ``format_value``; a
    container already being rendered shows up as ``[Circular]``.
    """
    if id(value) in seen:
        return '"[Circular]"'

    seen.add(id(value))
    try:
        if isinstance(value, dict):
            members = (
                f"{_format_key(key)}:{_format_member(item, seen)}"
                for key, item in value.items()
            )
            return "{" + ",".join(members) + "}"
        return "[" + ",".join(_format_member(item, seen) for item in value) + "]"
    finally:
        seen.discard(id(value))


def _format_key(key: Any) -> str:
    return _dumps(key if isinstance(key, str) else format_value(key))


def _format_member(item: Any, seen: set[int]) -> str:
    if isinstance(item, (dict, list, tuple)):
        return _format_structure(item, seen)
    if item is None or (isinstance(item, (str, bool, int, float)) and not isinstance(item, Enum)):
        return _dumps(item)
    return _dumps(format_value(item))


def _dumps(item: Any) -> str:
    return json.dumps(item, ensure_ascii=False)
