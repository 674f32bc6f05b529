"""Shared pytest configuration."""
pytest_plugins = ["policy_gateway.testing.fixtures"]
