"""Domain errors – malformed decision input."""

from __future__ import annotations

from typing import Any

from policy_gateway.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a domain rule is violated."""

    default_code = "domain_error"


class ValidationError(DomainError):
    """Input data does not meet validation rules.

    ``errors`` is a list of field-level validation failures.
    """

    default_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors: list[dict[str, Any]] = errors or []

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["errors"] = self.errors
        return base


class InvalidInputError(ValidationError):
    """A subject, action or resource handed to the decision client is blank.

    This is a caller bug, never a policy failure: it is not retried, does not
    count against the circuit breaker and is never converted into a deny.
    """

    default_code = "invalid_input"


__all__ = [
    "DomainError",
    "InvalidInputError",
    "ValidationError",
]
