"""Health – PolicyEngineHealthCheck."""
from __future__ import annotations

import httpx

from policy_gateway.observability.health import HealthCheck, HealthStatus


class PolicyEngineHealthCheck(HealthCheck):
    """``GET {base_url}{path}``; any 2xx within *timeout* seconds is healthy.

    Never raises: transport errors and timeouts become an unhealthy status
    whose detail names the failure.
    """

    def __init__(
        self,
        base_url: str,
        path: str = "/health",
        timeout: float = 2.0,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = base_url.rstrip("/") + "/" + path.lstrip("/")
        self._timeout = timeout
        self._transport = transport

    @property
    def name(self) -> str:
        return "policy_engine"

    @property
    def url(self) -> str:
        return self._url

    async def check(self) -> HealthStatus:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.get(self._url)
        except httpx.TimeoutException:
            return HealthStatus.down(f"url={self._url} timed out after {self._timeout}s")
        except httpx.HTTPError as exc:
            return HealthStatus.down(f"url={self._url} error={type(exc).__name__}: {exc}")
        if resp.is_success:
            return HealthStatus.up(f"url={self._url}")
        return HealthStatus.down(f"url={self._url} status={resp.status_code}")


__all__ = ["PolicyEngineHealthCheck"]
