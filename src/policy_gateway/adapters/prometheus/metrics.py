"""Prometheus adapter – PrometheusMetrics."""
from __future__ import annotations

import re
from typing import Any

from prometheus_client import REGISTRY, CollectorRegistry
from prometheus_client import Counter as _PromCounter
from prometheus_client import Gauge as _PromGauge
from prometheus_client import Histogram as _PromHistogram

from policy_gateway.observability.metrics import Counter, Gauge, Histogram, Labels, Metrics

_INVALID = re.compile(r"[^a-zA-Z0-9_:]")


def _metric_name(name: str) -> str:
    return _INVALID.sub("_", name)


class _PromInstrument:
    """Create labelled children lazily; label names are fixed on first use."""

    def __init__(self, factory: Any) -> None:
        self._factory = factory
        self._metric: Any = None
        self._label_names: tuple[str, ...] = ()

    def _child(self, labels: Labels | None) -> Any:
        labels = labels or {}
        if self._metric is None:
            self._label_names = tuple(sorted(labels))
            self._metric = self._factory(self._label_names)
        if not self._label_names:
            return self._metric
        return self._metric.labels(**{k: labels.get(k, "") for k in self._label_names})


class _PromCounterAdapter(_PromInstrument, Counter):
    def add(self, value: float = 1.0, labels: Labels | None = None) -> None:
        self._child(labels).inc(value)


class _PromHistogramAdapter(_PromInstrument, Histogram):
    def record(self, value: float, labels: Labels | None = None) -> None:
        self._child(labels).observe(value)


class _PromGaugeAdapter(_PromInstrument, Gauge):
    def set(self, value: float, labels: Labels | None = None) -> None:
        self._child(labels).set(value)


class PrometheusMetrics(Metrics):
    """``prometheus_client`` backed metrics.

    Instruments are cached per name so that repeated ``counter(name)`` calls do
    not try to register a collector twice. Pass a private
    :class:`~prometheus_client.CollectorRegistry` in tests.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry or REGISTRY
        self._instruments: dict[str, Any] = {}

    def _get(self, name: str, build: Any) -> Any:
        if name not in self._instruments:
            self._instruments[name] = build()
        return self._instruments[name]

    def counter(self, name: str, description: str = "", unit: str = "") -> Counter:
        metric = _metric_name(name)
        return self._get(name, lambda: _PromCounterAdapter(
            lambda labels: _PromCounter(metric, description or metric, labels, registry=self.registry)
        ))

    def histogram(self, name: str, description: str = "", unit: str = "ms", boundaries: list[float] | None = None) -> Histogram:
        metric = _metric_name(name)
        extra: dict[str, Any] = {"buckets": boundaries} if boundaries else {}
        return self._get(name, lambda: _PromHistogramAdapter(
            lambda labels: _PromHistogram(metric, description or metric, labels, registry=self.registry, **extra)
        ))

    def gauge(self, name: str, description: str = "", unit: str = "") -> Gauge:
        metric = _metric_name(name)
        return self._get(name, lambda: _PromGaugeAdapter(
            lambda labels: _PromGauge(metric, description or metric, labels, registry=self.registry)
        ))


__all__ = ["PrometheusMetrics"]
