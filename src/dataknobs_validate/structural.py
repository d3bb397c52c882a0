"""Structural validators for keyed shapes and ordered sequences.

Each member is validated with its own child context, so paths in errors
point at the exact member that failed:

    ```python
    schema = object_({
        "name": string(),
        "tags": array(string()),
    })
    validate(schema, {"name": "nana", "tags": ["a", 1]}).error.path
    # '$.tags[1]'
    ```

Validation is fail-fast: the first failing member ends the run and no
partial result is built.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from .context import UNSET
from .core import Validator, create_validator, failure_message
from .exceptions import ValidationError

if TYPE_CHECKING:
    from collections.abc import Callable

    from .context import Context

_TEXT_TYPES = (str, bytes, bytearray)


def is_sequence(value: Any) -> bool:
    """Check if a value is an ordered, index-addressable sequence of items."""
    return isinstance(value, Sequence) and not isinstance(value, _TEXT_TYPES)


def _object(value: Any, ctx: Context, args: tuple) -> dict[str, Any]:
    shape, message = args
    if not isinstance(value, Mapping):
        raise ValidationError(message or failure_message(ctx, value, "object"))

    result: dict[str, Any] = {}
    for key, validator in shape.items():
        member = value.get(key, UNSET)
        output = validator(member, ctx.child(key, member))
        # Members that stay unset are left out, like keys never supplied
        if output is not UNSET:
            result[key] = output
    return result


def _array(value: Any, ctx: Context, args: tuple) -> list[Any]:
    item_validator, message = args
    if not is_sequence(value):
        raise ValidationError(message or failure_message(ctx, value, "array"))

    return [
        item_validator(item, ctx.child(index, item))
        for index, item in enumerate(value)
    ]


_object_factory = create_validator("object", _object)
_array_factory = create_validator("array", _array)


def object_(
    shape: Mapping[str, Callable[[Any, Context], Any]],
    message: str | None = None,
) -> Validator:
    """Validate a mapping against a shape of per-key validators.

    Keys are visited in the shape's own order. Keys missing from the input
    are validated as ``UNSET``; keys not named by the shape are dropped.

    Args:
        shape: Mapping of key to the validator for that key's value
        message: Message to use when the value is not a mapping

    Returns:
        Validator producing a new dict of validated members
    """
    return _object_factory(dict(shape), message)


def array(
    item_validator: Callable[[Any, Context], Any],
    message: str | None = None,
) -> Validator:
    """Validate every item of a list or tuple with ``item_validator``.

    Args:
        item_validator: Validator applied to each item
        message: Message to use when the value is not a sequence

    Returns:
        Validator producing a new list of validated items
    """
    return _array_factory(item_validator, message)
