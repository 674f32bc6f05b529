"""Observability – structlog processors and get_logger helper."""
from __future__ import annotations

from typing import Any

import structlog

from policy_gateway.kernel.security import SecurityContext
from policy_gateway.observability.correlation import CorrelationContext


class CorrelationProcessor:
    """Stamp every event with the ambient request identity.

    Adds ``correlation_id`` plus ``user_id``/``trace_id`` when known from
    :class:`CorrelationContext`, and ``subject`` when a principal is bound in
    :class:`SecurityContext`. Keys already present on the event are kept.
    """

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        ctx = CorrelationContext.get()
        if ctx is not None:
            fields = {"correlation_id": ctx.correlation_id, "user_id": ctx.user_id, "trace_id": ctx.trace_id}
            for key, value in fields.items():
                if value is not None:
                    event_dict.setdefault(key, value)
        principal = SecurityContext.get_current()
        if principal is not None and principal.subject:
            event_dict.setdefault("subject", principal.subject)
        return event_dict


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a structlog logger for *name*, bound to *initial_values*."""
    logger = structlog.get_logger(name)
    return logger.bind(**initial_values) if initial_values else logger


__all__ = ["CorrelationProcessor", "get_logger"]
