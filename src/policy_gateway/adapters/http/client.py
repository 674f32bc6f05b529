"""HTTP adapter – HttpxHttpClient."""
from __future__ import annotations

from typing import Any

import httpx

from policy_gateway.kernel.errors import ExternalServiceError, TimeoutError as AppTimeoutError
from policy_gateway.observability.correlation import CorrelationContext


class HttpxHttpClient:
    """Thin async httpx wrapper with structured error mapping.

    * ``httpx.TimeoutException`` → :class:`~policy_gateway.kernel.errors.TimeoutError`
    * non-2xx status → :class:`ExternalServiceError` with ``status_code``
    * any other ``httpx.HTTPError`` → :class:`ExternalServiceError`

    The active correlation id is forwarded in *correlation_header* unless the
    caller passes that header explicitly.
    """

    def __init__(
        self,
        base_url: str = "",
        timeout: float = 10.0,
        *,
        correlation_header: str = "X-Request-ID",
        **kwargs: Any,
    ) -> None:
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, **kwargs)
        self._correlation_header = correlation_header

    async def __aenter__(self) -> "HttpxHttpClient":
        await self._client.__aenter__()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self._client.__aexit__(*args)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self._request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self._request("POST", url, **kwargs)

    def _with_correlation(self, headers: dict[str, str] | None) -> dict[str, str]:
        merged = dict(headers or {})
        ctx = CorrelationContext.get()
        if ctx is not None and not any(k.lower() == self._correlation_header.lower() for k in merged):
            merged[self._correlation_header] = ctx.correlation_id
        return merged

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        kwargs["headers"] = self._with_correlation(kwargs.get("headers"))
        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
            return response
        except httpx.TimeoutException as exc:
            raise AppTimeoutError(f"HTTP request timed out: {method} {url}") from exc
        except httpx.HTTPStatusError as exc:
            raise ExternalServiceError(
                service=url,
                message=f"HTTP {exc.response.status_code} from {method} {url}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise ExternalServiceError(service=url, message=str(exc) or type(exc).__name__) from exc


HttpClient = HttpxHttpClient

__all__ = ["HttpClient", "HttpxHttpClient"]
