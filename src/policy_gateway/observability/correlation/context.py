"""Observability – RequestContext, CorrelationContext."""
from __future__ import annotations

import contextlib
import dataclasses
from contextvars import ContextVar, Token
from typing import Iterator
from uuid import uuid4

import structlog


@dataclasses.dataclass(frozen=True)
class RequestContext:
    """Ambient context for a single inbound request; discarded at request end."""
    correlation_id: str
    user_id: str | None = None
    trace_id: str | None = None

    @classmethod
    def new(cls, user_id: str | None = None) -> "RequestContext":
        return cls(correlation_id=str(uuid4()), user_id=user_id)


_CTX_VAR: ContextVar[RequestContext | None] = ContextVar("_pg_request_ctx", default=None)


class CorrelationContext:
    """Ambient correlation context stored in a ``ContextVar``."""

    @staticmethod
    def set(ctx: RequestContext) -> Token[RequestContext | None]:
        return _CTX_VAR.set(ctx)

    @staticmethod
    def reset(token: Token[RequestContext | None]) -> None:
        _CTX_VAR.reset(token)

    @staticmethod
    def get() -> RequestContext | None:
        return _CTX_VAR.get()

    @staticmethod
    def require() -> RequestContext:
        ctx = _CTX_VAR.get()
        if ctx is None:
            raise RuntimeError("No RequestContext in current context")
        return ctx

    @staticmethod
    def get_or_new() -> RequestContext:
        ctx = _CTX_VAR.get()
        if ctx is None:
            ctx = RequestContext.new()
            _CTX_VAR.set(ctx)
        return ctx

    @staticmethod
    def clear() -> None:
        _CTX_VAR.set(None)

    @staticmethod
    def resolve_id(headers: dict[str, str], header_names: tuple[str, ...]) -> str:
        """Pick the first non-blank header from *header_names*, else a new UUID.

        Header names are matched case-insensitively. A W3C ``traceparent``
        (``ver-trace_id-parent_id-flags``) contributes its trace-id segment.
        """
        norm: dict[str, str] = {k.lower(): v for k, v in headers.items()}
        for name in header_names:
            value = norm.get(name.lower(), "").strip()
            if not value:
                continue
            if name.lower() == "traceparent":
                parts = value.split("-")
                if len(parts) >= 2 and parts[1]:
                    return parts[1]
                continue
            return value
        return str(uuid4())


@contextlib.contextmanager
def bind_correlation(ctx: RequestContext) -> Iterator[RequestContext]:
    """Attach *ctx* to the context var and to structlog for the ``with`` block.

    Both bindings are undone on every exit path, including exceptions and
    cancellation.
    """
    token = CorrelationContext.set(ctx)
    try:
        with structlog.contextvars.bound_contextvars(correlation_id=ctx.correlation_id):
            yield ctx
    finally:
        CorrelationContext.reset(token)


__all__ = ["CorrelationContext", "RequestContext", "bind_correlation"]
