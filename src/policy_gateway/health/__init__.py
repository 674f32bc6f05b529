"""Health – policy engine reachability probe."""
from policy_gateway.health.check import PolicyEngineHealthCheck
from policy_gateway.health.probe import HealthProbe

__all__ = ["HealthProbe", "PolicyEngineHealthCheck"]
