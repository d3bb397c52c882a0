"""Presence gates: required and optional.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .context import is_absent
from .core import Skip, Validator, create_validator, failure_message
from .exceptions import ValidationError

if TYPE_CHECKING:
    from .context import Context


def _required(value: Any, ctx: Context, args: tuple) -> Any:
    message = args[0] if args else None
    if is_absent(value):
        raise ValidationError(message or failure_message(ctx, value, "required"))
    return value


def _optional(value: Any, ctx: Context, args: tuple) -> Any:
    if is_absent(value):
        return Skip(value)
    return value


_required_factory = create_validator("required", _required)
_optional_factory = create_validator("optional", _optional, control=True)


def required(message: str | None = None) -> Validator:
    """Reject ``None`` and ``UNSET``; pass anything else through.

    Args:
        message: Message to use instead of the default one
    """
    return _required_factory(message)


def optional() -> Validator:
    """Stop the enclosing pipe when the value is ``None`` or ``UNSET``.

    The absent value is returned unchanged, so
    ``pipe(optional(), string())`` accepts ``None`` as well as any string.
    Present values pass through without affecting the pipe.
    """
    return _optional_factory()
