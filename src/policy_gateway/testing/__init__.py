"""Testing support – fakes and pytest fixtures.

Import the fixtures in your ``conftest.py``::

    pytest_plugins = ["policy_gateway.testing.fixtures"]
"""
from policy_gateway.testing.fakes import FakeMetricsRegistry, FakeTokenVerifier, ManualClock

__all__ = ["FakeMetricsRegistry", "FakeTokenVerifier", "ManualClock"]
