"""Pytest configuration for dataknobs_validate tests."""

import sys
from pathlib import Path

import pytest

# Add the package source to path for testing
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from dataknobs_validate import make_ctx  # noqa: E402
from dataknobs_validate.registry import predicates, register_builtins, transforms, validators  # noqa: E402


@pytest.fixture
def root_ctx():
    """Build a root context for a value."""
    def _make(value):
        return make_ctx(None, None, value)
    return _make


@pytest.fixture
def clean_registries():
    """Reset the global registries around a test."""
    predicates.clear()
    transforms.clear()
    validators.clear()
    register_builtins()
    yield
    predicates.clear()
    transforms.clear()
    validators.clear()
    register_builtins()
