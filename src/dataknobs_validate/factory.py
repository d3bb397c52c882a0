"""Factory building validators from configuration.

Schemas can be declared as plain data, typically loaded from YAML. A node
is one of:

- a string naming a validator type, e.g. ``string``
- a list of nodes, run as a ``pipe``
- a mapping with a ``type`` key plus options for that type

Example Configuration:
    type: object
    fields:
      name: [required, string]
      age:
        type: integer
        optional: true
      tags:
        type: array
        items: string
      email:
        - string
        - type: check
          predicate: looks_like_email
          message: not an email address

Predicates, transforms and custom validator factories are looked up by
name in the registries of ``dataknobs_validate.registry``.
"""

import logging
from pathlib import Path
from typing import Any, Dict

import yaml

from .control import optional, required
from .core import Validator
from .exceptions import ConfigurationError, NotFoundError
from .operators import check, pipe, transform
from .registry import Registry, predicates, transforms, validators
from .structural import array, object_

logger = logging.getLogger(__name__)

# Options accepted by the node types built here rather than by a registered factory
_NODE_OPTIONS = {
    "object": {"fields", "message"},
    "array": {"items", "message"},
    "pipe": {"steps"},
    "check": {"predicate", "message", "name"},
    "transform": {"function"},
}


class FactoryBase:
    """Base class for factory objects.

    Factories that inherit from this should implement the create method.
    """

    def create(self, **config: Any) -> Any:
        """Create an object from configuration.

        Args:
            **config: Configuration parameters

        Returns:
            Created object
        """
        raise NotImplementedError("Subclasses must implement create method")


class SchemaFactory(FactoryBase):
    """Factory for creating validators from schema configuration.

    Configuration Options:
        type (str): Validator type (string, number, integer, boolean,
            required, optional, object, array, pipe, check, transform or any
            name registered in the validator registry)
        message (str): Failure message override, where the type takes one
        fields (dict): ``object`` only - field name to node
        items (node): ``array`` only - node applied to every item
        steps (list): ``pipe`` only - nodes applied in order
        predicate (str): ``check`` only - registered predicate name
        name (str): ``check`` only - name reported on failure
        function (str): ``transform`` only - registered transform name
        args (list): Positional arguments for registered validator factories
        required (bool): Prefix the node with ``required()``
        optional (bool): Prefix the node with ``optional()``
    """

    def __init__(
        self,
        validator_registry: Registry | None = None,
        predicate_registry: Registry | None = None,
        transform_registry: Registry | None = None,
    ):
        """Initialize the factory.

        Args:
            validator_registry: Registry of validator factories by type name
            predicate_registry: Registry of predicates for ``check`` nodes
            transform_registry: Registry of functions for ``transform`` nodes
        """
        self.validators = validators if validator_registry is None else validator_registry
        self.predicates = predicates if predicate_registry is None else predicate_registry
        self.transforms = transforms if transform_registry is None else transform_registry

    def create(self, **config: Any) -> Validator:
        """Create a validator from a mapping node.

        Args:
            **config: Schema configuration

        Returns:
            Validator

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        logger.info("Creating schema: %s", config.get("name", config.get("type", "unnamed")))
        return self.build(config)

    def build(self, node: Any, path: str = "$") -> Validator:
        """Build a validator from any kind of node.

        Args:
            node: String, list or mapping node
            path: Location of the node within the configuration

        Returns:
            Validator

        Raises:
            ConfigurationError: If the node is invalid
        """
        if isinstance(node, str):
            return self._build_registered(node, {}, path)
        if isinstance(node, list):
            return self._build_pipe(node, path)
        if isinstance(node, dict):
            return self._build_mapping(node, path)

        raise ConfigurationError(
            f"Invalid schema node at {path}: expected string, list or mapping, "
            f"got {type(node).__name__}",
            context={"node": path},
        )

    def _build_mapping(self, node: Dict[str, Any], path: str) -> Validator:
        options = dict(node)
        node_type = options.pop("type", None)
        if not node_type:
            raise ConfigurationError(
                f"Schema node at {path} is missing 'type'",
                context={"node": path, "keys": list(node.keys())},
            )

        # Labels only, except for check where name is reported on failure
        options.pop("description", None)
        if node_type != "check":
            options.pop("name", None)

        is_required = options.pop("required", False) is True
        is_optional = options.pop("optional", False) is True
        if is_required and is_optional:
            raise ConfigurationError(
                f"Schema node at {path} cannot be both required and optional",
                context={"node": path},
            )

        validator = self._build_typed(node_type, options, path)

        if is_required:
            return pipe(required(), validator)
        if is_optional:
            return pipe(optional(), validator)
        return validator

    def _build_typed(self, node_type: str, options: Dict[str, Any], path: str) -> Validator:
        allowed = _NODE_OPTIONS.get(node_type)
        if allowed is not None:
            unknown = [key for key in options if key not in allowed]
            if unknown:
                raise ConfigurationError(
                    f"Unknown options for '{node_type}' at {path}: {', '.join(map(str, unknown))}",
                    context={"node": path, "type": node_type, "unknown": unknown},
                )

        if node_type == "object":
            return self._build_object(options, path)
        if node_type == "array":
            return self._build_array(options, path)
        if node_type == "pipe":
            return self._build_pipe(options.get("steps"), path)
        if node_type == "check":
            return self._build_check(options, path)
        if node_type == "transform":
            return self._build_transform(options, path)
        return self._build_registered(node_type, options, path)

    def _build_object(self, options: Dict[str, Any], path: str) -> Validator:
        fields = options.get("fields")
        if not isinstance(fields, dict):
            raise ConfigurationError(
                f"Object node at {path} needs a 'fields' mapping",
                context={"node": path},
            )

        shape = {
            name: self.build(field_node, f"{path}.fields.{name}")
            for name, field_node in fields.items()
        }
        return object_(shape, options.get("message"))

    def _build_array(self, options: Dict[str, Any], path: str) -> Validator:
        if "items" not in options:
            raise ConfigurationError(
                f"Array node at {path} needs an 'items' node",
                context={"node": path},
            )

        item_validator = self.build(options["items"], f"{path}.items")
        return array(item_validator, options.get("message"))

    def _build_pipe(self, steps: Any, path: str) -> Validator:
        if not isinstance(steps, list) or not steps:
            raise ConfigurationError(
                f"Pipe node at {path} needs a non-empty list of steps",
                context={"node": path},
            )

        return pipe(*(self.build(step, f"{path}[{i}]") for i, step in enumerate(steps)))

    def _build_check(self, options: Dict[str, Any], path: str) -> Validator:
        predicate_name = options.get("predicate")
        predicate = self._lookup(self.predicates, predicate_name, "predicate", path)
        return check(
            predicate,
            options.get("message"),
            name=options.get("name") or predicate_name,
        )

    def _build_transform(self, options: Dict[str, Any], path: str) -> Validator:
        fn = self._lookup(self.transforms, options.get("function"), "function", path)
        return transform(fn)

    def _build_registered(self, node_type: str, options: Dict[str, Any], path: str) -> Validator:
        factory = self._lookup(self.validators, node_type, "type", path)
        args = options.pop("args", [])
        if not isinstance(args, list):
            raise ConfigurationError(
                f"'args' of node at {path} must be a list",
                context={"node": path, "type": node_type},
            )

        try:
            return factory(*args, **options)
        except TypeError as e:
            raise ConfigurationError(
                f"Invalid options for '{node_type}' at {path}: {e}",
                context={"node": path, "type": node_type, "options": sorted(options)},
            ) from e

    def _lookup(self, registry: Registry, key: Any, option: str, path: str) -> Any:
        if not isinstance(key, str) or not key:
            raise ConfigurationError(
                f"Schema node at {path} needs a '{option}' name",
                context={"node": path},
            )

        try:
            return registry.get(key)
        except NotFoundError as e:
            logger.warning("Unknown %s '%s' at %s", option, key, path)
            raise ConfigurationError(
                f"Unknown {option} '{key}' at {path}",
                context={"node": path, option: key, "available": registry.list_keys()},
            ) from e


def _read_yaml(path: str | Path) -> Any:
    file_path = Path(path)
    if not file_path.exists():
        raise ConfigurationError(
            f"Schema file not found: {file_path}",
            context={"path": str(file_path)},
        )

    try:
        with open(file_path, encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML in schema file {file_path}: {e}",
            context={"path": str(file_path)},
        ) from e


def load_schema(path: str | Path, factory: SchemaFactory | None = None) -> Validator:
    """Build a validator from a YAML schema file.

    Args:
        path: Path to a YAML file holding a single schema node
        factory: Factory to build with (defaults to ``schema_factory``)

    Returns:
        Validator

    Raises:
        ConfigurationError: If the file is missing or invalid
    """
    node = _read_yaml(path)
    logger.info("Loading schema from %s", path)
    return (factory or schema_factory).build(node)


def load_schemas(path: str | Path, factory: SchemaFactory | None = None) -> Dict[str, Validator]:
    """Build named validators from a YAML file with a ``schemas`` mapping.

    Args:
        path: Path to a YAML file of the form ``schemas: {name: node, ...}``
        factory: Factory to build with (defaults to ``schema_factory``)

    Returns:
        Dict of schema name to validator

    Raises:
        ConfigurationError: If the file is missing or invalid
    """
    document = _read_yaml(path)
    schemas = document.get("schemas") if isinstance(document, dict) else None
    if not isinstance(schemas, dict):
        raise ConfigurationError(
            f"Schema file {path} needs a top-level 'schemas' mapping",
            context={"path": str(path)},
        )

    builder = factory or schema_factory
    return {name: builder.build(node, f"$.{name}") for name, node in schemas.items()}


# Create singleton instance for registration
schema_factory = SchemaFactory()
