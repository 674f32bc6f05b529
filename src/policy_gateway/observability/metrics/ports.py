"""Observability – Counter, Histogram, Gauge, Metrics ports.

The gateway's instruments are ``policy.decision.duration`` (histogram, ms,
labelled by ``outcome``), ``policy.decision.success`` and
``policy.decision.failure`` (counters) and ``policy.circuit.state`` (gauge).
Backends translate dotted names into their own conventions.
"""
from __future__ import annotations

import abc
from typing import Mapping

Labels = Mapping[str, str]


class Counter(abc.ABC):
    @abc.abstractmethod
    def add(self, value: float = 1.0, labels: Labels | None = None) -> None: ...


class Histogram(abc.ABC):
    @abc.abstractmethod
    def record(self, value: float, labels: Labels | None = None) -> None: ...


class Gauge(abc.ABC):
    @abc.abstractmethod
    def set(self, value: float, labels: Labels | None = None) -> None: ...


class Metrics(abc.ABC):
    """Port: factory for named instruments. Asking twice for a name returns the same instrument."""

    @abc.abstractmethod
    def counter(self, name: str, description: str = "", unit: str = "") -> Counter: ...

    @abc.abstractmethod
    def histogram(
        self, name: str, description: str = "", unit: str = "ms", boundaries: list[float] | None = None
    ) -> Histogram: ...

    @abc.abstractmethod
    def gauge(self, name: str, description: str = "", unit: str = "") -> Gauge: ...


__all__ = ["Counter", "Gauge", "Histogram", "Labels", "Metrics"]
