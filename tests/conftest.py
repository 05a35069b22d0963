"""Pytest configuration for tests.

No sys.path hacks - tests should import from the installed balikobot_checks package.
"""

import logging

import pytest


@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI calls logging.basicConfig; undo it so tests stay independent."""
    root = logging.getLogger()
    level = root.level
    handlers = list(root.handlers)
    yield
    root.setLevel(level)
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
