"""FastAPI adapter – ASGI middleware implementations.

FastAPICorrelationIdMiddleware
FastAPISecurityMiddleware
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Awaitable, Callable, Iterable

from policy_gateway.enforcement.responses import error_response, send_json
from policy_gateway.enforcement.skip import SkipList
from policy_gateway.kernel.errors import UnauthorizedError
from policy_gateway.kernel.security import Principal, SecurityContext
from policy_gateway.observability.correlation import CorrelationContext, RequestContext, bind_correlation
from policy_gateway.observability.logging import get_logger

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = get_logger(__name__)

TokenVerifier = Callable[[str], Awaitable[Principal]]


# ---------------------------------------------------------------------------
# Correlation-ID middleware
# ---------------------------------------------------------------------------

class FastAPICorrelationIdMiddleware:
    """Extract correlation ID from request headers, propagate to response.

    Header resolution order:
    1. *header_name* (``X-Request-ID``)
    2. ``X-Correlation-ID``
    3. ``traceparent`` (W3C trace-context, extracts trace-id segment)
    4. Generated UUID v4

    The response carries the id under *header_name* unless the app already
    set that header.
    """

    def __init__(
        self,
        app: "ASGIApp",
        header_name: str = "X-Request-ID",
        fallback_headers: tuple[str, ...] = ("X-Correlation-ID", "traceparent"),
    ) -> None:
        self.app = app
        self._response_header = header_name.lower().encode()
        self._request_headers = (header_name, *fallback_headers)

    async def __call__(self, scope: "Scope", receive: "Receive", send: "Send") -> None:
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        headers = {k.decode("latin-1"): v.decode("latin-1") for k, v in scope.get("headers", [])}
        correlation_id = CorrelationContext.resolve_id(headers, self._request_headers)

        response_header = self._response_header
        encoded_id = correlation_id.encode("latin-1", errors="replace")

        async def send_with_header(message: "Message") -> None:
            if message["type"] == "http.response.start":
                headers_list: list[tuple[bytes, bytes]] = list(message.get("headers", []))
                if not any(k.lower() == response_header for k, _ in headers_list):
                    headers_list.append((response_header, encoded_id))
                    message = {**message, "headers": headers_list}
            await send(message)

        with bind_correlation(RequestContext(correlation_id=correlation_id)):
            await self.app(scope, receive, send_with_header)


# ---------------------------------------------------------------------------
# Security (JWT / OIDC) middleware
# ---------------------------------------------------------------------------

class FastAPISecurityMiddleware:
    """Extract a Bearer JWT, verify it, and populate :class:`SecurityContext`.

    Parameters
    ----------
    app:
        The inner ASGI application.
    verifier:
        Any callable ``async (token: str) -> Principal``; pass
        ``OIDCTokenVerifier.verify`` here. ``None`` makes every request
        anonymous (useful in tests).
    require_auth:
        When ``True`` non-public requests without a valid token receive 401.
        When ``False`` the request proceeds with no principal.
    public_paths:
        Skip-list entries (``=`` exact, otherwise prefix) exempt from
        *require_auth*.
    """

    def __init__(
        self,
        app: "ASGIApp",
        verifier: TokenVerifier | None = None,
        require_auth: bool = False,
        public_paths: Iterable[str] = (),
    ) -> None:
        self.app = app
        self._verifier = verifier
        self._require_auth = require_auth
        self._public = SkipList.parse(public_paths)

    async def __call__(self, scope: "Scope", receive: "Receive", send: "Send") -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers", []))
        auth_value = headers.get(b"authorization", b"").decode("latin-1").strip()

        principal: Principal | None = None
        if auth_value.lower().startswith("bearer "):
            token = auth_value[7:].strip()
            if self._verifier is not None and token:
                try:
                    principal = await self._verifier(token)
                except UnauthorizedError as exc:
                    logger.info("security.token_rejected", reason=exc.message)

        path: str = scope.get("path", "")
        if principal is None and self._require_auth and not self._public.matches(path):
            await self._unauthorized(send, path)
            return

        with SecurityContext.bound(principal):
            await self.app(scope, receive, send)

    async def _unauthorized(self, send: "Send", path: str) -> None:
        ctx = CorrelationContext.get()
        # token details stay in the log
        exc = UnauthorizedError("Missing or invalid credentials")
        status, body = error_response(exc, path=path, correlation_id=ctx.correlation_id if ctx else None)
        await send_json(send, status, body, [(b"www-authenticate", b"Bearer")])


__all__ = ["FastAPICorrelationIdMiddleware", "FastAPISecurityMiddleware", "TokenVerifier"]
