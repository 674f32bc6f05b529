"""FastAPI adapter – health / metrics routers."""
from __future__ import annotations

from typing import Any, Callable

from fastapi import APIRouter, Response
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, CollectorRegistry, generate_latest

from policy_gateway.observability.health import HealthRegistry

HealthDetails = Callable[[], dict[str, Any]]


def FastAPIHealthRouter(
    registry: HealthRegistry,
    path: str = "/actuator/health",
    details: HealthDetails | None = None,
    tags: list[str] | None = None,
) -> APIRouter:
    """Return a health router.

    * ``GET {path}`` – full report from *registry*; 200 when every check is
      up, 503 otherwise. *details* adds extra top-level fields.
    * ``GET {path}/live`` – liveness, always 200 while the process is up.
    * ``GET {path}/ready`` – same checks as ``{path}``, status only.
    """
    router = APIRouter(tags=tags or ["ops"])

    @router.get(path)
    async def health() -> JSONResponse:
        report = await registry.run_all()
        content = report.to_dict()
        if details is not None:
            content.update(details())
        return JSONResponse(status_code=200 if report.overall else 503, content=content)

    @router.get(f"{path}/live")
    async def liveness() -> dict[str, str]:
        return {"status": "UP"}

    @router.get(f"{path}/ready")
    async def readiness() -> JSONResponse:
        report = await registry.run_all()
        return JSONResponse(
            status_code=200 if report.overall else 503,
            content={"status": "UP" if report.overall else "DOWN"},
        )

    return router


def FastAPIMetricsRouter(
    path: str = "/actuator/prometheus",
    registry: CollectorRegistry | None = None,
) -> APIRouter:
    """Return a Prometheus text-exposition router."""
    router = APIRouter()
    collector_registry = registry or REGISTRY

    @router.get(path, tags=["ops"])
    async def metrics() -> Response:
        return Response(content=generate_latest(collector_registry), media_type=CONTENT_TYPE_LATEST)

    return router


__all__ = ["FastAPIHealthRouter", "FastAPIMetricsRouter", "HealthDetails"]
