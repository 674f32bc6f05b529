"""Resilience – timeout policies."""
from policy_gateway.resilience.timeouts.policy import TimeoutPolicy

__all__ = ["TimeoutPolicy"]
