"""Leaf kind checkers for primitive values.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .core import Validator, create_validator, failure_message
from .exceptions import ValidationError

if TYPE_CHECKING:
    from collections.abc import Callable

    from .context import Context


def _kind_check(name: str, accepts: Callable[[Any], bool]) -> Callable[..., Validator]:
    def handler(value: Any, ctx: Context, args: tuple) -> Any:
        message = args[0] if args else None
        if not accepts(value):
            raise ValidationError(message or failure_message(ctx, value, name))
        return value

    return create_validator(name, handler)


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a number here
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


_string = _kind_check("string", lambda value: isinstance(value, str))
_number = _kind_check("number", _is_number)
_integer = _kind_check("integer", _is_integer)
_boolean = _kind_check("boolean", lambda value: isinstance(value, bool))


def string(message: str | None = None) -> Validator:
    """Accept ``str`` values."""
    return _string(message)


def number(message: str | None = None) -> Validator:
    """Accept ``int`` and ``float`` values, but not ``bool``."""
    return _number(message)


def integer(message: str | None = None) -> Validator:
    """Accept ``int`` values, but not ``bool``."""
    return _integer(message)


def boolean(message: str | None = None) -> Validator:
    """Accept ``True`` and ``False``."""
    return _boolean(message)
