"""Pytest configuration and shared fixtures."""

import logging

import pytest
from hypothesis import settings

# Create a profile named "no_deadline" with deadline disabled.
settings.register_profile("no_deadline", deadline=None)
settings.load_profile("no_deadline")


@pytest.fixture
def restore_root_logger():
    """Undo handlers and level changes made by the CLI's logging setup."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
