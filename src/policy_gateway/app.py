"""Demo application – FastAPI app wiring the gateway end to end.

Serve with::

    uvicorn --factory policy_gateway.app:create_app

Request pipeline (outermost first): correlation id → bearer-token
verification → policy enforcement → routes.
"""
from __future__ import annotations

import contextlib
from typing import Any, AsyncIterator

from fastapi import Depends, FastAPI
from pydantic import BaseModel
from prometheus_client import CollectorRegistry

from policy_gateway import __version__
from policy_gateway.adapters.fastapi import (
    FastAPICorrelationIdMiddleware,
    FastAPIExceptionMapper,
    FastAPIHealthRouter,
    FastAPIMetricsRouter,
    FastAPISecurityMiddleware,
    TokenVerifier,
    current_principal,
)
from policy_gateway.adapters.keycloak import JWKSClient, OIDCTokenVerifier
from policy_gateway.adapters.prometheus import PrometheusMetrics
from policy_gateway.config.settings import GatewaySettings, load_settings
from policy_gateway.decision import DecisionClient
from policy_gateway.enforcement import EnforcementFilter
from policy_gateway.health import HealthProbe, PolicyEngineHealthCheck
from policy_gateway.kernel.errors import AccessDeniedError
from policy_gateway.kernel.security import Principal
from policy_gateway.mapping import RequestMapper
from policy_gateway.observability.health import HealthRegistry
from policy_gateway.observability.logging import configure_logging, get_logger
from policy_gateway.observability.metrics import Metrics

logger = get_logger(__name__)

# Reachable without a bearer token.
PUBLIC_PATHS: tuple[str, ...] = (
    "/api/public/",
    "/actuator/health",
    "/actuator/prometheus",
    "/health",
    "=/",
    "/docs",
    "=/openapi.json",
)


class AccessRequest(BaseModel):
    action: str
    resource: str


class PublicAccessRequest(BaseModel):
    user: str
    action: str
    resource: str


class AccessResponse(BaseModel):
    allowed: bool


def create_app(
    settings: GatewaySettings | None = None,
    *,
    decision_client: DecisionClient | None = None,
    verifier: TokenVerifier | None = None,
    metrics: Metrics | None = None,
) -> FastAPI:
    """Build the gateway application.

    Parameters
    ----------
    settings:
        Gateway options; read from ``OPA_*`` environment variables when omitted.
    decision_client:
        Pre-built client (tests). The app closes only clients it creates.
    verifier:
        ``async (token) -> Principal``; built from ``jwks_uri``/``audience``
        when omitted. Without either, every protected request gets 401.
    metrics:
        Metrics backend; a :class:`PrometheusMetrics` on a private registry
        when omitted.
    """
    settings = settings or load_settings()
    configure_logging(settings.log_level)
    logger.info("gateway.settings", **settings.as_dict())

    collector_registry: CollectorRegistry | None = None
    if metrics is None:
        collector_registry = CollectorRegistry()
        metrics = PrometheusMetrics(collector_registry)
    elif isinstance(metrics, PrometheusMetrics):
        collector_registry = metrics.registry

    owns_client = decision_client is None
    client = decision_client or DecisionClient.from_settings(settings, metrics=metrics)

    if verifier is None and settings.jwks_uri:
        verifier = OIDCTokenVerifier(JWKSClient(settings.jwks_uri), settings.audience).verify

    probe = HealthProbe(
        PolicyEngineHealthCheck(settings.url, settings.health_path, settings.health_timeout_seconds),
        interval=settings.health_interval_s,
    )
    health = HealthRegistry()
    health.register(probe)

    @contextlib.asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        await probe.start()
        logger.info("gateway.started", engine=settings.url, policy_path=settings.policy_path)
        try:
            yield
        finally:
            await probe.stop()
            if owns_client:
                await client.aclose()
            logger.info("gateway.stopped")

    app = FastAPI(title="policy-gateway", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.decision_client = client
    app.state.health_probe = probe

    FastAPIExceptionMapper().register(app)
    app.include_router(
        FastAPIHealthRouter(health, details=lambda: {"circuit": {"state": client.circuit_state.value}})
    )
    app.include_router(FastAPIMetricsRouter(registry=collector_registry))

    @app.get("/api/users/{user_id}/documents/{doc_id}")
    async def get_document(
        user_id: str,
        doc_id: str,
        action: str | None = None,
        principal: Principal = Depends(current_principal),
    ) -> dict[str, Any]:
        if action is not None:
            result = await client.decide(principal.subject, action, f"document:{doc_id}")
            if not result.allowed:
                raise AccessDeniedError("Access denied by policy")
        return {
            "document_id": doc_id,
            "owner": user_id,
            "content": f"Document {doc_id} content for user {user_id}",
        }

    @app.post("/api/check-access", response_model=AccessResponse)
    async def check_access(
        body: AccessRequest,
        principal: Principal = Depends(current_principal),
    ) -> AccessResponse:
        result = await client.decide(principal.subject, body.action, body.resource)
        return AccessResponse(allowed=result.allowed)

    @app.post("/api/public/check-access", response_model=AccessResponse)
    async def public_check_access(body: PublicAccessRequest) -> AccessResponse:
        result = await client.decide(body.user, body.action, body.resource)
        return AccessResponse(allowed=result.allowed)

    # Starlette wraps in reverse order: the last middleware added runs first.
    app.add_middleware(
        EnforcementFilter,
        decision_client=client,
        mapper=RequestMapper(),
        skip_paths=settings.skip_paths,
        correlation_header=settings.correlation_header,
    )
    app.add_middleware(
        FastAPISecurityMiddleware,
        verifier=verifier,
        require_auth=True,
        public_paths=PUBLIC_PATHS,
    )
    app.add_middleware(FastAPICorrelationIdMiddleware, header_name=settings.correlation_header)
    return app


__all__ = ["AccessRequest", "AccessResponse", "PUBLIC_PATHS", "PublicAccessRequest", "create_app"]
