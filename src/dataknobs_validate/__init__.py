"""Composable runtime validation for Python values.

Validators are small units that check, coerce and re-shape a value. They
compose into pipelines and structural schemas, and report failures with the
exact location of the offending value:

    ```python
    from dataknobs_validate import (
        array, check, number, object_, optional, pipe, string, transform, validate,
    )

    schema = object_({
        "name": pipe(string(), transform(lambda v, ctx: v.strip())),
        "age": pipe(number(), check(lambda v, ctx: v >= 0, "age must be >= 0")),
        "nickname": pipe(optional(), string()),
        "tags": array(string()),
    })

    result = validate(schema, {"name": " nana ", "age": 3, "tags": ["a"]})
    result.valid
    # True
    result.result
    # {'name': 'nana', 'age': 3, 'tags': ['a']}
    ```
"""

from dataknobs_validate.context import ROOT_PATH, UNSET, Context, is_absent, make_ctx
from dataknobs_validate.control import optional, required
from dataknobs_validate.core import Skip, Validator, create_validator, failure_message
from dataknobs_validate.exceptions import (
    ConfigurationError,
    DataknobsError,
    NotFoundError,
    OperationError,
    ValidationError,
)
from dataknobs_validate.factory import (
    FactoryBase,
    SchemaFactory,
    load_schema,
    load_schemas,
    schema_factory,
)
from dataknobs_validate.formatting import format_value
from dataknobs_validate.operators import check, pipe, transform
from dataknobs_validate.primitives import boolean, integer, number, string
from dataknobs_validate.registry import Registry, predicates, transforms, validators
from dataknobs_validate.result import ValidationResult, validate, validate_many
from dataknobs_validate.structural import array, object_

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Context
    "Context",
    "make_ctx",
    "ROOT_PATH",
    "UNSET",
    "is_absent",
    # Core
    "Validator",
    "Skip",
    "create_validator",
    "failure_message",
    "format_value",
    # Operators
    "pipe",
    "transform",
    "check",
    # Control
    "required",
    "optional",
    # Structural
    "object_",
    "array",
    # Primitives
    "string",
    "number",
    "integer",
    "boolean",
    # Entry point
    "validate",
    "validate_many",
    "ValidationResult",
    # Exceptions
    "DataknobsError",
    "ValidationError",
    "ConfigurationError",
    "NotFoundError",
    "OperationError",
    # Configuration
    "FactoryBase",
    "SchemaFactory",
    "schema_factory",
    "load_schema",
    "load_schemas",
    # Registries
    "Registry",
    "predicates",
    "transforms",
    "validators",
]
