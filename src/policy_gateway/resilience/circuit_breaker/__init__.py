"""Resilience – Circuit Breaker pattern."""
from policy_gateway.resilience.circuit_breaker.errors import CircuitOpenError
from policy_gateway.resilience.circuit_breaker.state import CircuitBreakerState
from policy_gateway.resilience.circuit_breaker.policy import CircuitBreakerPolicy
from policy_gateway.resilience.circuit_breaker.breaker import CircuitBreaker, CircuitSnapshot

__all__ = [
    "CircuitBreaker",
    "CircuitBreakerPolicy",
    "CircuitBreakerState",
    "CircuitOpenError",
    "CircuitSnapshot",
]
