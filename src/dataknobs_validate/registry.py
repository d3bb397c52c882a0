"""Named registries for building schemas from configuration.

Configuration can only refer to callables by name, so predicates,
transforms and validator factories used by configured schemas are
registered here first:

    ```python
    from dataknobs_validate.registry import predicates

    @predicates.register_function()
    def is_positive(value, ctx):
        return value > 0
    ```

The ``validators`` registry starts out holding the built-in leaf and
control factories.
"""

import logging
import threading
from typing import Any, Callable, Dict, Generic, List, TypeVar

from .control import optional, required
from .exceptions import NotFoundError, OperationError
from .primitives import boolean, integer, number, string

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Registry(Generic[T]):
    """Thread-safe registry of named items.

    Attributes:
        name: Name of the registry (for logging/debugging)

    Args:
        name: Name for this registry instance

    Example:
        ```python
        registry = Registry[str]("my_registry")
        registry.register("key1", "value1")
        registry.get("key1")
        # 'value1'
        ```
    """

    def __init__(self, name: str):
        self._name = name
        self._items: Dict[str, T] = {}
        self._lock = threading.RLock()

    @property
    def name(self) -> str:
        """Get registry name."""
        return self._name

    def register(self, key: str, item: T, allow_overwrite: bool = False) -> None:
        """Register an item by key.

        Args:
            key: Unique identifier for the item
            item: Item to register
            allow_overwrite: Whether to allow overwriting existing items

        Raises:
            OperationError: If item already exists and allow_overwrite is False
        """
        with self._lock:
            if not allow_overwrite and key in self._items:
                raise OperationError(
                    f"Item '{key}' already registered in {self._name}",
                    context={"key": key, "registry": self._name},
                )
            self._items[key] = item
        logger.debug("Registered '%s' in %s", key, self._name)

    def register_function(
        self, key: str | None = None, allow_overwrite: bool = False
    ) -> Callable[[T], T]:
        """Decorator registering a function under ``key`` or its own name."""

        def decorator(fn: T) -> T:
            self.register(key or getattr(fn, "__name__"), fn, allow_overwrite=allow_overwrite)
            return fn

        return decorator

    def unregister(self, key: str) -> T:
        """Unregister and return an item by key.

        Raises:
            NotFoundError: If item not found
        """
        with self._lock:
            if key not in self._items:
                raise NotFoundError(
                    f"Item not found: {key}",
                    context={"key": key, "registry": self._name},
                )
            return self._items.pop(key)

    def get(self, key: str) -> T:
        """Get an item by key.

        Args:
            key: Key of item to retrieve

        Returns:
            The registered item

        Raises:
            NotFoundError: If item not found
        """
        with self._lock:
            if key not in self._items:
                raise NotFoundError(
                    f"Item not found: {key}",
                    context={
                        "key": key,
                        "registry": self._name,
                        "available_keys": list(self._items.keys()),
                    },
                )
            return self._items[key]

    def get_optional(self, key: str) -> T | None:
        """Get an item by key, returning None if not found."""
        with self._lock:
            return self._items.get(key)

    def has(self, key: str) -> bool:
        """Check if item exists."""
        with self._lock:
            return key in self._items

    def list_keys(self) -> List[str]:
        """List all registered keys."""
        with self._lock:
            return list(self._items.keys())

    def count(self) -> int:
        """Get count of registered items."""
        with self._lock:
            return len(self._items)

    def clear(self) -> None:
        """Clear all items from registry."""
        with self._lock:
            self._items.clear()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._items

    def __len__(self) -> int:
        return self.count()

    def __repr__(self) -> str:
        return f"Registry(name={self._name!r}, count={self.count()})"


# (value, ctx) -> bool
predicates: Registry[Callable[..., Any]] = Registry("predicates")
# (value, ctx) -> new value
transforms: Registry[Callable[..., Any]] = Registry("transforms")
# (*args) -> Validator
validators: Registry[Callable[..., Any]] = Registry("validators")

BUILTIN_VALIDATORS: Dict[str, Callable[..., Any]] = {
    "string": string,
    "number": number,
    "integer": integer,
    "boolean": boolean,
    "required": required,
    "optional": optional,
}


def register_builtins(registry: Registry[Callable[..., Any]] = validators) -> None:
    """Register the built-in validator factories, replacing any overrides."""
    for key, factory in BUILTIN_VALIDATORS.items():
        registry.register(key, factory, allow_overwrite=True)


register_builtins()
