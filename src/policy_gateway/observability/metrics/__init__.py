"""Observability – metrics ports."""
from policy_gateway.observability.metrics.ports import Counter, Gauge, Histogram, Labels, Metrics
from policy_gateway.observability.metrics.noop import NoopMetrics

__all__ = ["Counter", "Gauge", "Histogram", "Labels", "Metrics", "NoopMetrics"]
