"""Observability – correlation context."""
from policy_gateway.observability.correlation.context import (
    CorrelationContext,
    RequestContext,
    bind_correlation,
)

__all__ = ["CorrelationContext", "RequestContext", "bind_correlation"]
