"""Composition operators: pipe, transform and check.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .core import Validator, create_validator, failure_message
from .exceptions import ValidationError

if TYPE_CHECKING:
    from collections.abc import Callable

    from .context import Context


def _run_stage(stage: Any, value: Any, ctx: Context) -> tuple[Any, bool]:
    if isinstance(stage, Validator):
        return stage.step(value, ctx)
    # Plain (value, ctx) callables never short-circuit
    return stage(value, ctx), True


def _pipe(value: Any, ctx: Context, stages: tuple) -> Any:
    for stage in stages:
        value, proceed = _run_stage(stage, value, ctx)
        if not proceed:
            break
    return value


_pipe_factory = create_validator("pipe", _pipe)


def pipe(*validators: Callable[[Any, Context], Any]) -> Validator:
    """Chain validators so each one receives the previous one's output.

    A control stage such as ``optional()`` can end the chain early, in which
    case the current value is returned. The short-circuit only applies to
    this pipe; an enclosing pipe carries on with its own next stage.

    Args:
        *validators: One or more validators, applied in order

    Returns:
        Validator running the chain

    Raises:
        ValueError: If no validators are given
    """
    if not validators:
        raise ValueError("pipe requires at least one validator")
    return _pipe_factory(*validators)


def _transform(value: Any, ctx: Context, args: tuple) -> Any:
    fn = args[0]
    return fn(value, ctx)


_transform_factory = create_validator("transform", _transform)


def transform(fn: Callable[[Any, Context], Any]) -> Validator:
    """Map the value through ``fn(value, ctx)``.

    Never fails on its own; anything ``fn`` raises is reported under the
    name ``transform``.
    """
    return _transform_factory(fn)


def predicate_name(fn: Callable[..., Any]) -> str:
    """Name a predicate by its declared name, or ``check`` if anonymous."""
    name = getattr(fn, "__name__", "")
    if not name or name == "<lambda>":
        return "check"
    return name


def _check(value: Any, ctx: Context, args: tuple) -> Any:
    fn, message, expected = args
    if fn(value, ctx) is True:
        return value
    raise ValidationError(message or failure_message(ctx, value, expected))


def check(
    fn: Callable[[Any, Context], Any],
    message: str | None = None,
    name: str | None = None,
) -> Validator:
    """Let the value through only if ``fn(value, ctx)`` returns ``True``.

    Any other return value, truthy or not, is a failure. The failure is
    reported under the predicate's name: ``name`` if given, else the
    function's ``__name__``, else ``check`` for lambdas and other anonymous
    callables.

    Args:
        fn: Predicate taking ``(value, ctx)``
        message: Message to use instead of the default one
        name: Explicit predicate name

    Returns:
        Validator applying the predicate
    """
    expected = name or predicate_name(fn)
    return create_validator(expected, _check)(fn, message, expected)
