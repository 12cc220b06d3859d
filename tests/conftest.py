"""Shared fixtures for rulekit tests."""

import pytest

from rulekit.checker import Checker


@pytest.fixture(autouse=True)
def reset_checker():
    """Restore the builtin handlers and messages around each test."""
    Checker.reset()
    yield
    Checker.reset()
