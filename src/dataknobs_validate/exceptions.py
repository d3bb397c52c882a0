"""Exception hierarchy for dataknobs validation.

Every error raised by this package derives from ``DataknobsError``, which
carries an optional context dictionary with structured error information.

Validation failures are reported as ``ValidationError``. Unlike the plain
context-rich errors, a ``ValidationError`` is *stamped* with the identity of
the validator that failed and the location of the offending value:

    ```python
    from dataknobs_validate import validate, object_, number

    result = validate(object_({"age": number()}), {"age": "ten"})
    result.error.expected
    # 'number'
    result.error.path
    # '$.age'
    ```

Stamping happens at most once. The innermost failing validator wins and any
enclosing validator re-raises the error untouched.
"""

from typing import Any, Dict


class DataknobsError(Exception):
    """Base exception for the validation package.

    Attributes:
        context: Dictionary containing contextual information about the error
        details: Alias for context

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context
        details: Alternative to context (takes precedence when both are given)
    """

    def __init__(
        self,
        message: str,
        context: Dict[str, Any] | None = None,
        details: Dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.context = dict(details or context or {})
        self.details = self.context


class ValidationError(DataknobsError):
    """Raised when a value fails validation.

    The stamping fields are ``None`` until a validator claims the error:

    Attributes:
        expected: Name of the validator (failure kind) that rejected the value
        actual: The value that validator received
        path: Location of the value, e.g. ``$.user.tags[2]``
        key: Key or index of the value within its parent
        parent: The containing value
        root: The top-level value being validated
    """

    def __init__(
        self,
        message: str,
        context: Dict[str, Any] | None = None,
        details: Dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context, details=details)
        self.expected: str | None = None
        self.actual: Any = None
        self.path: str | None = None
        self.key: str | int | None = None
        self.parent: Any = None
        self.root: Any = None

    @property
    def message(self) -> str:
        """The error message."""
        return str(self)

    @property
    def is_stamped(self) -> bool:
        """Whether a validator has already claimed this error."""
        return bool(self.expected)

    def stamp(self, expected: str, actual: Any, ctx: Any) -> bool:
        """Attach failure kind and location, unless already stamped.

        Args:
            expected: Name of the failing validator
            actual: Value the failing validator received
            ctx: Context the failing validator ran in

        Returns:
            True if the error was stamped by this call
        """
        if self.is_stamped:
            return False

        self.expected = expected
        self.actual = actual
        self.path = ctx.path
        self.key = ctx.key
        self.parent = ctx.parent
        self.root = ctx.root
        self.context.update({"expected": expected, "path": ctx.path, "key": ctx.key})
        return True

    def to_dict(self) -> Dict[str, Any]:
        """Convert the error to a dictionary for reporting."""
        return {
            "message": self.message,
            "expected": self.expected,
            "actual": self.actual,
            "path": self.path,
            "key": self.key,
        }

    def __repr__(self) -> str:
        return f"ValidationError({self.message!r}, expected={self.expected!r}, path={self.path!r})"


class ConfigurationError(DataknobsError):
    """Raised when a schema configuration is invalid or missing.

    Example:
        ```python
        raise ConfigurationError(
            "Unknown validator type: 'strng'",
            context={"node": "$.fields.name", "type": "strng"}
        )
        ```
    """

    pass


class NotFoundError(DataknobsError):
    """Raised when a requested registry entry is not found."""

    pass


class OperationError(DataknobsError):
    """Raised when a registry operation fails, e.g. a duplicate registration."""

    pass


__all__ = [
    "DataknobsError",
    "ValidationError",
    "ConfigurationError",
    "NotFoundError",
    "OperationError",
]
