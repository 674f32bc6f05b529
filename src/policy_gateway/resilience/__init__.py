"""Resilience – circuit breaker, bounded retry, timeouts."""

from policy_gateway.resilience.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerPolicy,
    CircuitBreakerState,
    CircuitOpenError,
    CircuitSnapshot,
)
from policy_gateway.resilience.retry import (
    BackoffStrategy,
    ConstantBackoff,
    ExponentialBackoff,
    FullJitter,
    JitterStrategy,
    NoJitter,
    RetryPolicy,
    backoff_for,
    jitter_for,
)
from policy_gateway.resilience.timeouts import TimeoutPolicy

__all__ = [
    "BackoffStrategy",
    "CircuitBreaker",
    "CircuitBreakerPolicy",
    "CircuitBreakerState",
    "CircuitOpenError",
    "CircuitSnapshot",
    "ConstantBackoff",
    "ExponentialBackoff",
    "FullJitter",
    "JitterStrategy",
    "NoJitter",
    "RetryPolicy",
    "TimeoutPolicy",
    "backoff_for",
    "jitter_for",
]
