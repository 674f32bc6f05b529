"""Enforcement – EnforcementFilter, the per-request policy check.

Pure ASGI middleware. For every HTTP request it:

1. binds a correlation id (reused from an outer middleware or the request
   headers, generated otherwise) and echoes it on the response;
2. passes skip-listed paths straight through;
3. defers requests without a verified principal to the identity layer;
4. maps the request to ``(subject, action, resource)`` and asks the
   :class:`DecisionClient`;
5. forwards allowed requests and answers everything else with a JSON error.

Failures in steps 1 to 4 never reach the downstream app and never allow.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable

from policy_gateway.decision import DecisionClient
from policy_gateway.enforcement.responses import error_response, send_json, status_for
from policy_gateway.enforcement.skip import SkipList
from policy_gateway.kernel.errors import AccessDeniedError
from policy_gateway.kernel.security import SecurityContext
from policy_gateway.mapping import RequestMapper
from policy_gateway.observability.correlation import CorrelationContext, RequestContext, bind_correlation
from policy_gateway.observability.logging import get_logger

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = get_logger(__name__)

DEFAULT_SKIP_PATHS: tuple[str, ...] = ("/api/public/", "/actuator/", "/health", "=/api/check-access", "=/")


class EnforcementFilter:
    """Allow or deny each inbound request with the remote policy engine.

    Parameters
    ----------
    app:
        The inner ASGI application.
    decision_client:
        Shared :class:`DecisionClient`; its circuit breaker is the only state
        shared between requests.
    mapper:
        :class:`RequestMapper`, the default rules when omitted.
    skip_paths:
        Skip-list entries, see :class:`SkipList`.
    correlation_header:
        Header read for and echoed with the correlation id.
    fallback_headers:
        Headers tried when *correlation_header* is absent.
    """

    def __init__(
        self,
        app: "ASGIApp",
        decision_client: DecisionClient,
        mapper: RequestMapper | None = None,
        *,
        skip_paths: Iterable[str] = DEFAULT_SKIP_PATHS,
        correlation_header: str = "X-Request-ID",
        fallback_headers: tuple[str, ...] = ("X-Correlation-ID",),
    ) -> None:
        self.app = app
        self._client = decision_client
        self._mapper = mapper or RequestMapper()
        self._skip = SkipList.parse(skip_paths)
        self._header_names = (correlation_header, *fallback_headers)
        self._response_header = correlation_header.lower().encode()

    async def __call__(self, scope: "Scope", receive: "Receive", send: "Send") -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        ctx = CorrelationContext.get()
        if ctx is None:
            headers = {k.decode("latin-1"): v.decode("latin-1") for k, v in scope.get("headers", [])}
            ctx = RequestContext(correlation_id=CorrelationContext.resolve_id(headers, self._header_names))

        with bind_correlation(ctx):
            await self._handle(scope, receive, self._echo_correlation(send, ctx.correlation_id))

    def _echo_correlation(self, send: "Send", correlation_id: str) -> "Send":
        name = self._response_header
        value = correlation_id.encode("latin-1", errors="replace")

        async def send_with_header(message: "Message") -> None:
            if message["type"] == "http.response.start":
                headers: list[tuple[bytes, bytes]] = list(message.get("headers", []))
                if not any(k.lower() == name for k, _ in headers):
                    headers.append((name, value))
                    message = {**message, "headers": headers}
            await send(message)

        return send_with_header

    async def _handle(self, scope: "Scope", receive: "Receive", send: "Send") -> None:
        path: str = scope.get("path", "")
        method: str = scope.get("method", "GET")

        if self._skip.matches(path):
            await self.app(scope, receive, send)
            return

        principal = SecurityContext.get_current()
        if principal is None:
            # the identity layer answers unauthenticated requests
            await self.app(scope, receive, send)
            return

        try:
            request = self._mapper.map(principal, method, path)
            result = await self._client.decide_request(request)
        except Exception as exc:  # noqa: BLE001
            await self._reject(send, exc, path)
            return

        if not result.allowed:
            logger.warning(
                "policy.access_denied",
                subject=request.subject,
                action=request.action,
                resource=request.resource,
                source=result.source.value,
            )
            await self._reject(send, AccessDeniedError("Access denied by policy"), path)
            return

        logger.debug("policy.access_granted", subject=request.subject, action=request.action, resource=request.resource)
        await self.app(scope, receive, send)

    async def _reject(self, send: "Send", exc: BaseException, path: str) -> None:
        ctx = CorrelationContext.get()
        status, body = error_response(exc, path=path, correlation_id=ctx.correlation_id if ctx else None)
        if status >= 500:
            logger.error(
                "policy.enforcement_failed",
                error_id=body.get("error_id"),
                error=repr(exc),
                exc_info=exc,
            )
        elif status_for(exc) != 403:
            logger.info("policy.request_rejected", status=status, code=body["code"])
        await send_json(send, status, body)


__all__ = ["DEFAULT_SKIP_PATHS", "EnforcementFilter"]
