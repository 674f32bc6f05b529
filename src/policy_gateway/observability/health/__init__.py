"""Observability – Health Checks."""
from policy_gateway.observability.health.check import HealthCheck, HealthStatus
from policy_gateway.observability.health.registry import HealthRegistry, HealthReport

__all__ = [
    "HealthCheck",
    "HealthRegistry",
    "HealthReport",
    "HealthStatus",
]
