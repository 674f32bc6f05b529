"""Resilience – CircuitBreakerState enum."""
from __future__ import annotations
from enum import Enum


class CircuitBreakerState(str, Enum):
    """Breaker state; ``gauge_value`` is what ``policy.circuit.state`` reports."""

    CLOSED = "CLOSED"
    HALF_OPEN = "HALF_OPEN"
    OPEN = "OPEN"

    @property
    def gauge_value(self) -> float:
        return {"CLOSED": 0.0, "HALF_OPEN": 1.0, "OPEN": 2.0}[self.value]


__all__ = ["CircuitBreakerState"]
