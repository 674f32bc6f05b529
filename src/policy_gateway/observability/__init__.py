"""Observability – correlation, logging, metrics, health."""

from policy_gateway.observability.correlation import CorrelationContext, RequestContext, bind_correlation
from policy_gateway.observability.health import HealthCheck, HealthRegistry, HealthReport, HealthStatus
from policy_gateway.observability.logging import JsonLoggerFactory, SensitiveFieldsFilter, configure_logging, get_logger
from policy_gateway.observability.metrics import Metrics, NoopMetrics

__all__ = [
    "CorrelationContext",
    "HealthCheck",
    "HealthRegistry",
    "HealthReport",
    "HealthStatus",
    "JsonLoggerFactory",
    "Metrics",
    "NoopMetrics",
    "RequestContext",
    "SensitiveFieldsFilter",
    "bind_correlation",
    "configure_logging",
    "get_logger",
]
