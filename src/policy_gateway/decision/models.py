"""Decision – DecisionRequest, DecisionResult, DecisionSource."""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any

from policy_gateway.kernel.errors import InvalidInputError


class DecisionSource(str, Enum):
    """Where an ``allowed`` value came from."""
    ENGINE = "ENGINE"
    FALLBACK = "FALLBACK"


@dataclasses.dataclass(frozen=True)
class DecisionRequest:
    """The ``(subject, action, resource)`` tuple sent to the policy engine.

    Every construction validates: each field must be a string that is not
    blank after trimming, otherwise
    :class:`~policy_gateway.kernel.errors.InvalidInputError` lists every
    offending field. Values are kept verbatim.
    """
    subject: str
    action: str
    resource: str

    def __post_init__(self) -> None:
        errors: list[dict[str, Any]] = []
        for name in ("subject", "action", "resource"):
            value = getattr(self, name)
            if not isinstance(value, str):
                errors.append({"field": name, "message": "must be a string"})
            elif not value.strip():
                errors.append({"field": name, "message": "must not be blank"})
        if errors:
            fields = ", ".join(e["field"] for e in errors)
            raise InvalidInputError(f"Invalid decision input: {fields}", errors=errors)

    @classmethod
    def create(cls, subject: Any, action: Any, resource: Any) -> "DecisionRequest":
        return cls(subject=subject, action=action, resource=resource)

    def to_input(self) -> dict[str, dict[str, str]]:
        """Wire body for the engine: ``{"input": {"user", "action", "resource"}}``."""
        return {"input": {"user": self.subject, "action": self.action, "resource": self.resource}}


@dataclasses.dataclass(frozen=True)
class DecisionResult:
    """Outcome of one ``decide`` call. ``allowed`` is never true from the fallback."""
    allowed: bool
    latency_ms: float
    source: DecisionSource

    @property
    def from_fallback(self) -> bool:
        return self.source == DecisionSource.FALLBACK


__all__ = ["DecisionRequest", "DecisionResult", "DecisionSource"]
