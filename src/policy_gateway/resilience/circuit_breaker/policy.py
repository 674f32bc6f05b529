"""Resilience – CircuitBreakerPolicy."""
from __future__ import annotations

import dataclasses


@dataclasses.dataclass(frozen=True)
class CircuitBreakerPolicy:
    """Configuration for a circuit breaker.

    ``open_duration_seconds`` is how long the breaker refuses calls after
    tripping. ``half_open_wait_seconds`` bounds how long a single HALF_OPEN
    trial may stay outstanding before another caller is admitted as the trial.
    """
    failure_threshold: int = 5
    open_duration_seconds: float = 30.0
    half_open_wait_seconds: float = 5.0
    excluded_exceptions: tuple[type[Exception], ...] = ()


__all__ = ["CircuitBreakerPolicy"]
