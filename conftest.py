"""Shared pytest configuration."""

pytest_plugins = ["admin_access.testing.fixtures"]
