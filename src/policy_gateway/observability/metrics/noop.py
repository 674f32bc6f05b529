"""Observability – NoopMetrics implementation."""
from __future__ import annotations

from policy_gateway.observability.metrics.ports import Counter, Gauge, Histogram, Labels, Metrics


class _Discard(Counter, Histogram, Gauge):
    """One instrument that satisfies every port and keeps nothing."""

    def add(self, value: float = 1.0, labels: Labels | None = None) -> None:
        return None

    def record(self, value: float, labels: Labels | None = None) -> None:
        return None

    def set(self, value: float, labels: Labels | None = None) -> None:
        return None


_DISCARD = _Discard()


class NoopMetrics(Metrics):
    """Default backend of :class:`~policy_gateway.decision.DecisionClient` when none is given."""

    def counter(self, name: str, description: str = "", unit: str = "") -> Counter:
        return _DISCARD

    def histogram(
        self, name: str, description: str = "", unit: str = "ms", boundaries: list[float] | None = None
    ) -> Histogram:
        return _DISCARD

    def gauge(self, name: str, description: str = "", unit: str = "") -> Gauge:
        return _DISCARD


__all__ = ["NoopMetrics"]
