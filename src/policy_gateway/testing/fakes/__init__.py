"""Testing fakes – in-memory doubles for ports and collaborators."""
from policy_gateway.testing.fakes.clock import ManualClock
from policy_gateway.testing.fakes.metrics import FakeMetricsRegistry
from policy_gateway.testing.fakes.verifier import FakeTokenVerifier

__all__ = ["FakeMetricsRegistry", "FakeTokenVerifier", "ManualClock"]
