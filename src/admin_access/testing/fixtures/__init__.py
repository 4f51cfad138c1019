"""Testing fixtures – pytest fixtures for the access console.

Enable with ``pytest_plugins = ["admin_access.testing.fixtures"]``.
"""
from admin_access.testing.fixtures.console import (
    FIXED_NOW,
    access_console,
    frozen_clock,
    ready_context,
)

__all__ = ["FIXED_NOW", "access_console", "frozen_clock", "ready_context"]
