"""pytest configuration and shared fixtures."""

import pytest

from qparam import build_default_engine, build_default_registry


@pytest.fixture
def registry():
    """Fresh registry with the four built-in value types."""
    return build_default_registry()


@pytest.fixture
def engine():
    """Fully wired engine with default settings."""
    return build_default_engine()


@pytest.fixture
def parser(engine):
    return engine.parser


@pytest.fixture
def compiler(engine):
    return engine.compiler
