"""Decision – resilient client for the remote policy engine."""
from policy_gateway.decision.client import DecisionClient
from policy_gateway.decision.models import DecisionRequest, DecisionResult, DecisionSource
from policy_gateway.resilience.circuit_breaker import CircuitBreakerState as CircuitState

__all__ = ["CircuitState", "DecisionClient", "DecisionRequest", "DecisionResult", "DecisionSource"]
