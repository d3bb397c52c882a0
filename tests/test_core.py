"""Tests for the validator core."""

import pytest

from dataknobs_validate import (
    Skip,
    ValidationError,
    Validator,
    create_validator,
    failure_message,
    make_ctx,
)


class TestCreateValidator:
    """Test create_validator wrapping and error stamping."""

    def test_success_passes_through_value(self, root_ctx):
        """Test the handler's return value is returned unchanged."""
        double = create_validator("double", lambda value, ctx, args: value * 2)()
        assert double(2, root_ctx(2)) == 4

    def test_factory_captures_args(self, root_ctx):
        """Test configuration args reach the handler."""
        seen = []

        def handler(value, ctx, args):
            seen.append(args)
            return value

        factory = create_validator("capture", handler)
        validator = factory("a", 1)
        validator("x", root_ctx("x"))
        assert seen == [("a", 1)]
        assert isinstance(validator, Validator)
        assert validator.name == "capture"
        assert validator.args == ("a", 1)
        assert factory.__name__ == "capture"

    def test_wraps_foreign_exceptions_and_stamps(self):
        """Test a non-validation exception is converted and enriched."""
        def handler(value, ctx, args):
            raise KeyError("boom")

        validator = create_validator("testValidator", handler)()
        parent = make_ctx(None, None, {"x": 42})
        ctx = make_ctx(parent, "x", 42)

        with pytest.raises(ValidationError) as exc_info:
            validator(42, ctx)

        error = exc_info.value
        assert isinstance(error.__cause__, KeyError)
        assert error.expected == "testValidator"
        assert error.actual == 42
        assert error.path == "$.x"
        assert error.key == "x"
        assert error.parent == {"x": 42}
        assert error.root == {"x": 42}
        assert "boom" in error.message

    def test_keeps_message_of_foreign_exception(self, root_ctx):
        """Test the wrapped error keeps the original message."""
        def handler(value, ctx, args):
            raise ValueError("boom")

        validator = create_validator("v", handler)()
        with pytest.raises(ValidationError, match="^boom$"):
            validator(1, root_ctx(1))

    def test_does_not_override_stamped_error(self, root_ctx):
        """Test an already stamped error keeps its identity."""
        def handler(value, ctx, args):
            error = ValidationError("inner")
            error.expected = "inner"
            raise error

        validator = create_validator("outer", handler)()
        with pytest.raises(ValidationError) as exc_info:
            validator("x", root_ctx("x"))
        assert exc_info.value.expected == "inner"

    def test_innermost_stamp_wins(self):
        """Test a failure two levels deep keeps the innermost location."""
        def fail(value, ctx, args):
            raise ValidationError("deep failure")

        inner = create_validator("inner", fail)()

        def middle_handler(value, ctx, args):
            return inner(value["b"], ctx.child("b", value["b"]))

        middle = create_validator("middle", middle_handler)()

        def outer_handler(value, ctx, args):
            return middle(value["a"], ctx.child("a", value["a"]))

        outer = create_validator("outer", outer_handler)()
        data = {"a": {"b": 1}}

        with pytest.raises(ValidationError) as exc_info:
            outer(data, make_ctx(None, None, data))

        error = exc_info.value
        assert error.expected == "inner"
        assert error.path == "$.a.b"
        assert error.actual == 1
        assert error.parent == {"b": 1}
        assert error.root is data

    def test_does_not_intercept_base_exceptions(self, root_ctx):
        """Test KeyboardInterrupt is not converted."""
        def handler(value, ctx, args):
            raise KeyboardInterrupt

        validator = create_validator("v", handler)()
        with pytest.raises(KeyboardInterrupt):
            validator(1, root_ctx(1))


class TestControlSignal:
    """Test the Skip short-circuit signal."""

    def test_control_step_reports_skip(self, root_ctx):
        """Test a control handler's Skip is unwrapped by step."""
        stop = create_validator("stop", lambda value, ctx, args: Skip(value), control=True)()
        assert stop.step(5, root_ctx(5)) == (5, False)
        assert stop(5, root_ctx(5)) == 5

    def test_non_control_skip_is_plain_value(self, root_ctx):
        """Test only control validators can short-circuit."""
        signal = Skip(1)
        plain = create_validator("plain", lambda value, ctx, args: signal)()
        assert plain.step(1, root_ctx(1)) == (signal, True)


class TestFailureMessage:
    """Test the default failure message."""

    def test_message_layout(self):
        """Test path, rendered value and name are combined."""
        ctx = make_ctx(make_ctx(None, None, {}), "age", [1])
        assert failure_message(ctx, [1], "number") == "($.age: [1]) ✖ number"
