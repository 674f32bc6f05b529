"""Prometheus adapter – Metrics port backed by prometheus_client."""
from policy_gateway.adapters.prometheus.metrics import PrometheusMetrics

__all__ = ["PrometheusMetrics"]
