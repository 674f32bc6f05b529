"""FastAPI adapter – FastAPIExceptionMapper."""
from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from policy_gateway.enforcement.responses import error_response
from policy_gateway.kernel.errors import BaseError, InvalidInputError
from policy_gateway.observability.correlation import CorrelationContext
from policy_gateway.observability.logging import get_logger

logger = get_logger(__name__)


class FastAPIExceptionMapper:
    """Register error → HTTP status handlers on a FastAPI app.

    Uses the same body shape as the enforcement filter (see
    :func:`~policy_gateway.enforcement.error_response`)::

        {"code": "unauthorized", "message": "...", "status": 401, "path": "...",
         "correlation_id": "...", "timestamp": "..."}

    FastAPI's own request-validation failures become ``invalid_input`` 400s.
    """

    def register(self, app: FastAPI) -> None:
        app.add_exception_handler(BaseError, self._handle_error)
        app.add_exception_handler(RequestValidationError, self._handle_request_validation)

    async def _handle_error(self, request: Request, exc: Exception) -> JSONResponse:
        return self._respond(request, exc)

    async def _handle_request_validation(self, request: Request, exc: Exception) -> JSONResponse:
        errors = [
            {"field": ".".join(str(p) for p in e.get("loc", ()) if p != "body"), "message": e.get("msg", "")}
            for e in getattr(exc, "errors", lambda: [])()
        ]
        return self._respond(request, InvalidInputError("Invalid request body", errors=errors))

    @staticmethod
    def _respond(request: Request, exc: Exception) -> JSONResponse:
        ctx = CorrelationContext.get()
        status, body = error_response(
            exc, path=request.url.path, correlation_id=ctx.correlation_id if ctx else None
        )
        if status >= 500:
            logger.error("http.request_failed", error_id=body.get("error_id"), error=repr(exc))
        return JSONResponse(status_code=status, content=body)


__all__ = ["FastAPIExceptionMapper"]
