"""Application-layer errors – authentication, authorization, timeouts."""

from __future__ import annotations

from typing import Any
from uuid import uuid4

from policy_gateway.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class UnauthorizedError(ApplicationError):
    """Missing or invalid credentials."""

    default_code = "unauthorized"


class MissingIdentityError(UnauthorizedError):
    """No usable verified identity when one is required."""

    default_code = "missing_identity"

    def __init__(self, message: str = "Authentication required", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class ForbiddenError(ApplicationError):
    """Authenticated principal lacks required permission."""

    default_code = "forbidden"

    def __init__(
        self,
        message: str = "Access denied",
        *,
        permission: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.permission = permission


class AccessDeniedError(ForbiddenError):
    """The policy decision was deny, whether from the engine or the fallback."""

    default_code = "access_denied"


class TimeoutError(ApplicationError):  # noqa: A001
    """Operation timed out."""

    default_code = "timeout"


class InternalError(ApplicationError):
    """Unexpected failure; only the opaque ``error_id`` leaves the process."""

    default_code = "internal_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        *,
        error_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.error_id = error_id or str(uuid4())

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "error_id": self.error_id}


__all__ = [
    "AccessDeniedError",
    "ApplicationError",
    "ForbiddenError",
    "InternalError",
    "MissingIdentityError",
    "TimeoutError",
    "UnauthorizedError",
]
