"""FastAPI adapter – middleware, exception mapper, health/metrics routers, deps."""
from policy_gateway.adapters.fastapi.deps import current_principal
from policy_gateway.adapters.fastapi.exception_mapper import FastAPIExceptionMapper
from policy_gateway.adapters.fastapi.middleware import (
    FastAPICorrelationIdMiddleware,
    FastAPISecurityMiddleware,
    TokenVerifier,
)
from policy_gateway.adapters.fastapi.routers import FastAPIHealthRouter, FastAPIMetricsRouter, HealthDetails

__all__ = [
    "FastAPICorrelationIdMiddleware",
    "FastAPIExceptionMapper",
    "FastAPIHealthRouter",
    "FastAPIMetricsRouter",
    "FastAPISecurityMiddleware",
    "HealthDetails",
    "TokenVerifier",
    "current_principal",
]
