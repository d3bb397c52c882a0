"""Tests for required and optional."""

import pytest

from dataknobs_validate import UNSET, ValidationError, make_ctx, optional, required


class TestRequired:
    """Test presence enforcement."""

    def test_passes_present_values(self, root_ctx):
        """Test present values, including falsy ones, pass."""
        for value in ("x", 0, "", False, []):
            assert required()(value, root_ctx(value)) == value

    @pytest.mark.parametrize("value", [None, UNSET])
    def test_rejects_absent_values(self, value):
        """Test None and UNSET both fail with the default message."""
        ctx = make_ctx(make_ctx(None, None, {}), "r", value)
        with pytest.raises(ValidationError, match="required") as exc_info:
            required()(value, ctx)
        assert exc_info.value.expected == "required"
        assert exc_info.value.path == "$.r"

    def test_custom_message(self, root_ctx):
        """Test a caller message replaces the default."""
        with pytest.raises(ValidationError, match="^must not be None$"):
            required("must not be None")(None, root_ctx(None))


class TestOptional:
    """Test the optional control unit."""

    def test_is_control_marked(self):
        """Test optional validators are marked as control units."""
        assert optional().control is True
        assert required().control is False

    @pytest.mark.parametrize("value", [None, UNSET])
    def test_absent_value_signals_skip(self, value, root_ctx):
        """Test absent values are returned and stop the pipe."""
        assert optional().step(value, root_ctx(value)) == (value, False)

    def test_present_value_continues(self, root_ctx):
        """Test present values pass without a signal."""
        assert optional().step("x", root_ctx("x")) == ("x", True)

    def test_direct_call_returns_value(self, root_ctx):
        """Test calling outside a pipe returns the plain value."""
        assert optional()(None, root_ctx(None)) is None
