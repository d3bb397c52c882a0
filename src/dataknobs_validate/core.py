"""Validator core: uniform wrapping of handlers into validators.

Every validator in this package, leaf or composite, is built with
``create_validator``. The wrapper gives all of them the same failure
behavior: whatever the handler raises comes out as a ``ValidationError``
stamped with the name of the validator whose own logic failed and the
location it failed at.

    ```python
    from dataknobs_validate import create_validator, validate

    def _even(value, ctx, args):
        if value % 2:
            raise ValueError(args[0] if args else "odd number")
        return value

    even = create_validator("even", _even)

    validate(even(), 3).error.expected
    # 'even'
    ```
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .exceptions import ValidationError
from .formatting import format_value

if TYPE_CHECKING:
    from collections.abc import Callable

    from .context import Context

I = TypeVar("I")  # noqa: E741
O = TypeVar("O")  # noqa: E741


@dataclass(frozen=True)
class Skip:
    """Short-circuit signal returned by control handlers.

    Tells the enclosing ``pipe`` to stop and return ``value`` as is.
    """

    value: Any


def as_validation_error(error: Exception, name: str, value: Any, ctx: Context) -> ValidationError:
    """Convert any exception into a stamped ``ValidationError``.

    A ``ValidationError`` keeps an existing stamp; other exceptions are
    wrapped with their message. Chain the original with ``raise ... from``.
    """
    if not isinstance(error, ValidationError):
        error = ValidationError(str(error) or type(error).__name__)
    error.stamp(name, value, ctx)
    return error


def failure_message(ctx: Context, value: Any, name: str) -> str:
    """Build the default failure message for a validator.

    Args:
        ctx: Context the validator ran in
        value: Offending value
        name: Validator or predicate name

    Returns:
        Message of the form ``(path: value) ✖ name``
    """
    return f"({ctx.path}: {format_value(value)}) ✖ {name}"


class Validator(Generic[I, O]):
    """A configured validator: ``(value, ctx) -> output``, raising on failure.

    Attributes:
        name: Failure kind reported when this validator's handler fails
        handler: ``handler(value, ctx, args)`` doing the actual work
        args: Configuration captured when the validator was created
        control: Whether the handler may signal a short-circuit with ``Skip``
    """

    __slots__ = ("name", "handler", "args", "control")

    def __init__(
        self,
        name: str,
        handler: Callable[[Any, Context, tuple], Any],
        args: tuple = (),
        control: bool = False,
    ):
        self.name = name
        self.handler = handler
        self.args = args
        self.control = control

    def step(self, value: I, ctx: Context) -> tuple[O, bool]:
        """Run the validator as a pipeline stage.

        Args:
            value: Value to validate
            ctx: Context of the value

        Returns:
            Tuple of (output, proceed); proceed is False when a control
            handler asked to skip the remaining stages

        Raises:
            ValidationError: If validation fails
        """
        try:
            output = self.handler(value, ctx, self.args)
        except ValidationError as e:
            e.stamp(self.name, value, ctx)
            raise
        except Exception as e:
            raise as_validation_error(e, self.name, value, ctx) from e

        if self.control and isinstance(output, Skip):
            return output.value, False
        return output, True

    def __call__(self, value: I, ctx: Context) -> O:
        output, _ = self.step(value, ctx)
        return output

    def __repr__(self) -> str:
        return f"Validator({self.name!r})"


def create_validator(
    name: str,
    handler: Callable[[Any, Context, tuple], Any],
    control: bool = False,
) -> Callable[..., Validator]:
    """Turn a handler into a validator factory.

    Configuration arguments given to the factory are captured and passed to
    the handler as a tuple on every call.

    Args:
        name: Failure kind reported when the handler raises
        handler: Callable taking ``(value, ctx, args)`` and returning the output
        control: Mark the validators as control units whose handler may return
            ``Skip`` to short-circuit an enclosing pipe

    Returns:
        Factory ``(*args) -> Validator``
    """

    def factory(*args: Any) -> Validator:
        return Validator(name, handler, args, control=control)

    factory.__name__ = name
    factory.__qualname__ = name
    return factory
