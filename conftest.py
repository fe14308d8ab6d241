"""Shared pytest configuration."""

pytest_plugins = ["mockwebserver.testing.fixtures"]
