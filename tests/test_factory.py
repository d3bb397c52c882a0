"""Tests for building validators from configuration."""

import pytest

from dataknobs_validate import (
    ConfigurationError,
    SchemaFactory,
    create_validator,
    load_schema,
    load_schemas,
    schema_factory,
    validate,
)
from dataknobs_validate.registry import predicates, transforms, validators


@pytest.fixture
def factory(clean_registries):
    """Factory with a few registered predicates and transforms."""
    predicates.register("is_positive", lambda value, ctx: value > 0)
    transforms.register("strip", lambda value, ctx: value.strip())
    return SchemaFactory()


class TestSchemaFactory:
    """Test SchemaFactory node handling."""

    def test_string_node(self, factory):
        """Test a bare type name."""
        schema = factory.build("string")
        assert validate(schema, "x").valid is True
        assert validate(schema, 1).error.expected == "string"

    def test_list_node_is_pipe(self, factory):
        """Test a list of nodes runs as a pipe."""
        schema = factory.build(["optional", "string"])
        assert validate(schema, None).valid is True
        assert validate(schema, 1).valid is False

    def test_object_node(self, factory):
        """Test object nodes with nested fields."""
        schema = factory.create(
            type="object",
            fields={
                "user": {
                    "type": "object",
                    "fields": {"name": "string", "age": "number"},
                },
            },
        )
        res = validate(schema, {"user": {"name": "nana", "age": "bad"}})
        assert res.valid is False
        assert res.error.path == "$.user.age"

    def test_array_node(self, factory):
        """Test array nodes."""
        schema = factory.build({"type": "array", "items": "number", "message": "need list"})
        assert validate(schema, [1, "x"]).error.path == "$[1]"
        assert validate(schema, "x").error.message == "need list"

    def test_message_option(self, factory):
        """Test message options reach built-in factories."""
        schema = factory.build({"type": "string", "message": "need text"})
        assert validate(schema, 1).error.message == "need text"

    def test_required_and_optional_flags(self, factory):
        """Test presence flags on mapping nodes."""
        schema = factory.build({
            "type": "object",
            "fields": {
                "id": {"type": "integer", "required": True},
                "nick": {"type": "string", "optional": True},
            },
        })
        assert validate(schema, {"id": 1}).result == {"id": 1}
        res = validate(schema, {"nick": "a"})
        assert res.error.expected == "required"
        assert res.error.path == "$.id"

    def test_check_and_transform_nodes(self, factory):
        """Test registered predicates and transforms."""
        schema = factory.build({
            "type": "pipe",
            "steps": [
                "number",
                {"type": "check", "predicate": "is_positive"},
            ],
        })
        res = validate(schema, -1)
        assert res.error.expected == "is_positive"
        assert "is_positive" in res.error.message

        strip = factory.build(["string", {"type": "transform", "function": "strip"}])
        assert validate(strip, "  a ").result == "a"

    def test_custom_registered_validator(self, factory):
        """Test custom validator factories with args."""
        def _max_len(value, ctx, args):
            if len(value) > args[0]:
                raise ValueError(f"longer than {args[0]}")
            return value

        validators.register("max_len", create_validator("max_len", _max_len))
        schema = factory.build({"type": "max_len", "args": [2]})
        res = validate(schema, "abc")
        assert res.error.expected == "max_len"
        assert res.error.message == "longer than 2"

    @pytest.mark.parametrize(
        "node",
        [
            "strng",
            {"fields": {}},
            {"type": "object"},
            {"type": "array"},
            {"type": "pipe", "steps": []},
            {"type": "check", "predicate": "missing"},
            {"type": "transform"},
            {"type": "optional", "message": "nope"},
            {"type": "string", "required": True, "optional": True},
            {"type": "string", "args": "x"},
            42,
        ],
    )
    def test_invalid_nodes(self, factory, node):
        """Test invalid configuration raises ConfigurationError."""
        with pytest.raises(ConfigurationError):
            factory.build(node)

    def test_error_reports_node_path(self, factory):
        """Test configuration errors point at the offending node."""
        with pytest.raises(ConfigurationError) as exc_info:
            factory.build({"type": "object", "fields": {"tags": {"type": "array", "items": "nope"}}})
        assert exc_info.value.context["node"] == "$.fields.tags.items"

    @pytest.mark.parametrize(
        "node",
        [
            {"type": "pipe", "steps": ["string"], "message": "ignored"},
            {"type": "object", "fields": {}, "items": "string"},
            {"type": "array", "items": "string", "fields": {}},
            {"type": "check", "predicate": "is_positive", "function": "strip"},
            {"type": "transform", "function": "strip", "message": "x"},
        ],
    )
    def test_unknown_options_rejected(self, factory, node):
        """Test options a node type does not take raise ConfigurationError."""
        with pytest.raises(ConfigurationError) as exc_info:
            factory.build(node)
        assert exc_info.value.context["type"] == node["type"]


class TestLoadSchema:
    """Test YAML schema loading."""

    def test_load_schema(self, factory, tmp_path):
        """Test building a schema from a YAML file."""
        path = tmp_path / "user.yaml"
        path.write_text(
            "type: object\n"
            "name: user\n"
            "fields:\n"
            "  name: [required, string]\n"
            "  tags:\n"
            "    type: array\n"
            "    items: string\n"
        )
        schema = load_schema(path)
        assert validate(schema, {"name": "a", "tags": ["x"]}).result == {"name": "a", "tags": ["x"]}
        assert validate(schema, {"name": "a", "tags": [1]}).error.path == "$.tags[0]"

    def test_load_schemas(self, factory, tmp_path):
        """Test loading several named schemas."""
        path = tmp_path / "schemas.yaml"
        path.write_text(
            "schemas:\n"
            "  id: integer\n"
            "  score: [number, {type: check, predicate: is_positive}]\n"
        )
        schemas = load_schemas(path, factory=factory)
        assert set(schemas) == {"id", "score"}
        assert validate(schemas["score"], 0).valid is False

    def test_missing_file(self, tmp_path):
        """Test a missing file raises ConfigurationError."""
        with pytest.raises(ConfigurationError):
            load_schema(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        """Test malformed YAML raises ConfigurationError."""
        path = tmp_path / "bad.yaml"
        path.write_text("type: [unclosed\n")
        with pytest.raises(ConfigurationError):
            load_schema(path)

    def test_load_schemas_requires_mapping(self, tmp_path):
        """Test a file without a schemas mapping is rejected."""
        path = tmp_path / "plain.yaml"
        path.write_text("type: string\n")
        with pytest.raises(ConfigurationError):
            load_schemas(path)

    def test_singleton_factory(self):
        """Test the module level factory instance."""
        assert isinstance(schema_factory, SchemaFactory)
