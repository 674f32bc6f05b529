"""Enforcement – error_response, the single exception → HTTP body mapping.

Body schema::

    {"code": "access_denied", "message": "...", "status": 403,
     "path": "/api/...", "correlation_id": "...", "timestamp": "..."}

plus ``error_id`` for internal errors and ``errors`` for validation errors.
Exceptions outside the known hierarchy become an :class:`InternalError`
whose message never carries the original exception text.
"""
from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import Any

from policy_gateway.kernel.errors import (
    BaseError,
    DomainError,
    ForbiddenError,
    InfrastructureError,
    InternalError,
    TimeoutError as AppTimeoutError,
    UnauthorizedError,
    ValidationError,
)

# ORDER MATTERS: more-specific subtypes first
ERROR_STATUS: tuple[tuple[type[BaseError], int], ...] = (
    (ValidationError, 400),
    (UnauthorizedError, 401),
    (ForbiddenError, 403),
    (AppTimeoutError, 504),
    (InfrastructureError, 503),
    (DomainError, 422),
    (InternalError, 500),
)


def status_for(exc: BaseException) -> int:
    for exc_type, status in ERROR_STATUS:
        if isinstance(exc, exc_type):
            return status
    return 500


def as_known_error(exc: BaseException) -> BaseError:
    """Return *exc* when it has a mapped status, else a fresh :class:`InternalError`."""
    if isinstance(exc, BaseError) and any(isinstance(exc, t) for t, _ in ERROR_STATUS):
        return exc
    return InternalError()


def error_response(
    exc: BaseException,
    *,
    path: str = "",
    correlation_id: str | None = None,
) -> tuple[int, dict[str, Any]]:
    """Map *exc* to ``(status, body)``."""
    error = as_known_error(exc)
    status = status_for(error)
    body: dict[str, Any] = {
        "code": error.code,
        "message": error.message,
        "status": status,
        "path": path,
        "correlation_id": correlation_id,
        "timestamp": datetime.now(UTC).isoformat(),
    }
    if isinstance(error, InternalError):
        body["error_id"] = error.error_id
    if isinstance(error, ValidationError):
        body["errors"] = error.errors
    return status, body


async def send_json(send: Any, status: int, body: dict[str, Any], extra_headers: list[tuple[bytes, bytes]] | None = None) -> None:
    """Write a complete JSON response on a raw ASGI ``send``."""
    payload = json.dumps(body, default=str).encode()
    headers = [
        (b"content-type", b"application/json"),
        (b"content-length", str(len(payload)).encode()),
        *(extra_headers or []),
    ]
    await send({"type": "http.response.start", "status": status, "headers": headers})
    await send({"type": "http.response.body", "body": payload})


__all__ = ["ERROR_STATUS", "as_known_error", "error_response", "send_json", "status_for"]
