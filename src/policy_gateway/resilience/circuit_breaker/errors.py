"""Resilience – circuit-breaker specific errors."""
from __future__ import annotations

from typing import Any

from policy_gateway.kernel.errors import InfrastructureError


class CircuitOpenError(InfrastructureError):
    """A :class:`CircuitBreaker` refused the call without attempting it.

    ``retry_after`` is the number of seconds until the breaker will admit a
    trial call, or ``None`` while a HALF_OPEN trial is in flight.
    """

    default_code = "circuit_open"

    def __init__(self, circuit_name: str, message: str | None = None, *, retry_after: float | None = None) -> None:
        self.circuit_name = circuit_name
        self.retry_after = retry_after
        super().__init__(message or f"Circuit breaker '{circuit_name}' is OPEN")

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["circuit_name"] = self.circuit_name
        if self.retry_after is not None:
            payload["retry_after"] = round(self.retry_after, 3)
        return payload


__all__ = ["CircuitOpenError"]
