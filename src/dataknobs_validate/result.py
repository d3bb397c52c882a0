"""Entry point: run a validator and report the outcome as a result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .context import ROOT_PATH, make_ctx
from .core import as_validation_error
from .exceptions import ValidationError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from .context import Context

logger = logging.getLogger(__name__)


def _schema_name(schema: Any) -> str:
    name = getattr(schema, "name", None) or getattr(schema, "__name__", "")
    if not isinstance(name, str) or not name or name == "<lambda>":
        return "schema"
    return name


@dataclass
class ValidationResult:
    """Outcome of a top-level validation.

    On success ``result`` holds the validator's output. On failure it holds
    the original, untransformed input and ``error`` holds the failure.
    """

    valid: bool
    result: Any
    error: ValidationError | None = None

    def __bool__(self) -> bool:
        """Allow 'if result:' usage to check validity."""
        return self.valid

    @classmethod
    def success(cls, result: Any) -> ValidationResult:
        """Create a successful validation result.

        Args:
            result: The validated (possibly transformed) value

        Returns:
            Successful ValidationResult
        """
        return cls(valid=True, result=result)

    @classmethod
    def failure(cls, value: Any, error: ValidationError) -> ValidationResult:
        """Create a failed validation result.

        Args:
            value: The original input value
            error: The failure that ended validation

        Returns:
            Failed ValidationResult
        """
        return cls(valid=False, result=value, error=error)

    def unwrap(self) -> Any:
        """Return the validated value, or raise the validation error."""
        if self.error is not None:
            raise self.error
        return self.result

    def to_dict(self) -> dict[str, Any]:
        """Convert the result to a dictionary for reporting."""
        data: dict[str, Any] = {"valid": self.valid, "result": self.result}
        if self.error is not None:
            data["error"] = self.error.to_dict()
        return data


def validate(
    schema: Callable[[Any, Context], Any],
    value: Any,
    root_path: str = ROOT_PATH,
) -> ValidationResult:
    """Validate a value against a schema.

    Args:
        schema: Validator to run
        value: Value to validate
        root_path: Path marker for the root of the value

    Returns:
        ValidationResult; never raises for failures raised by the schema
    """
    ctx = make_ctx(None, None, value, root_path=root_path)
    try:
        output = schema(value, ctx)
    except Exception as e:
        # Plain callable schemas are not wrapped by the validator core
        error = as_validation_error(e, _schema_name(schema), value, ctx)
        if error is not e:
            error.__cause__ = e
        logger.debug("Validation failed at %s (%s): %s", error.path, error.expected, error)
        return ValidationResult.failure(value, error)
    return ValidationResult.success(output)


def validate_many(
    schema: Callable[[Any, Context], Any],
    values: Iterable[Any],
    stop_on_error: bool = False,
    root_path: str = ROOT_PATH,
) -> list[ValidationResult]:
    """Validate several values independently against the same schema.

    Args:
        schema: Validator to run
        values: Values to validate
        stop_on_error: If True, stop after the first invalid value
        root_path: Path marker for the root of each value

    Returns:
        List of ValidationResults, one per value validated
    """
    results = []

    for value in values:
        result = validate(schema, value, root_path=root_path)
        results.append(result)

        if not result.valid and stop_on_error:
            break

    return results
