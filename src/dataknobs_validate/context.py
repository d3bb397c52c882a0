"""Location metadata carried through a validation run.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

ROOT_PATH = "$"


class _Unset:
    """Marker for a value that was never supplied.

    Distinct from ``None``, which is an explicit null assignment.
    """

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Unset:
        return self

    def __deepcopy__(self, memo: dict) -> _Unset:
        return self

    def __reduce__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


def is_absent(value: Any) -> bool:
    """Check if a value is ``None`` or ``UNSET``."""
    return value is None or value is UNSET


@dataclass(frozen=True)
class Context:
    """Where a value sits within the structure being validated.

    Attributes:
        path: Path from the root, e.g. ``$.users[0].name``
        key: Key or index of the value within its parent (None at the root)
        parent: The containing value (None at the root)
        root: The top-level value
        value: The value at this location
    """

    path: str
    key: str | int | None
    parent: Any
    root: Any
    value: Any

    def child(self, key: str | int, value: Any) -> Context:
        """Create the context for a member of this context's value."""
        return make_ctx(self, key, value)


def make_ctx(
    parent_ctx: Context | None,
    key: str | int | None,
    value: Any,
    root_path: str = ROOT_PATH,
) -> Context:
    """Create a context, descending from ``parent_ctx`` if given.

    Integer keys extend the path as ``[index]``, any other key as ``.name``.
    ``root`` is inherited unchanged from the parent; ``parent`` is the parent
    context's value.

    Args:
        parent_ctx: Context of the containing value, or None for the root
        key: Key or index of the value within its parent
        value: The value at the new location
        root_path: Path marker used when creating a root context

    Returns:
        New Context
    """
    if parent_ctx is None:
        return Context(path=root_path, key=key, parent=None, root=value, value=value)

    if isinstance(key, int) and not isinstance(key, bool):
        path = f"{parent_ctx.path}[{key}]"
    else:
        path = f"{parent_ctx.path}.{key}"

    return Context(
        path=path,
        key=key,
        parent=parent_ctx.value,
        root=parent_ctx.root,
        value=value,
    )
