"""Observability – SensitiveFieldsFilter."""
from __future__ import annotations

import re
from typing import Any

from policy_gateway.kernel.security import DEFAULT_SENSITIVE_FIELDS

_BEARER = re.compile(r"(?i)\b(bearer)\s+[A-Za-z0-9._~+/=-]+")


class SensitiveFieldsFilter:
    """Mask credentials in log events.

    Values under a sensitive key become ``[REDACTED]``. Bearer tokens
    embedded anywhere in a string value (``"Bearer eyJ..."``) are masked in
    place, so a logged header or error text never carries a usable token.
    """

    REDACTED = "[REDACTED]"

    def __init__(self, sensitive_fields: frozenset[str] | None = None) -> None:
        self._fields = frozenset(f.lower() for f in (sensitive_fields or DEFAULT_SENSITIVE_FIELDS))

    def redact(self, data: dict[str, Any]) -> dict[str, Any]:
        """Top-level keys only."""
        return {k: self.REDACTED if k.lower() in self._fields else self._scrub(v) for k, v in data.items()}

    def redact_deep(self, data: dict[str, Any]) -> dict[str, Any]:
        return {k: self.REDACTED if k.lower() in self._fields else self._walk(v) for k, v in data.items()}

    def _walk(self, value: Any) -> Any:
        if isinstance(value, dict):
            return self.redact_deep(value)
        if isinstance(value, (list, tuple)):
            return type(value)(self._walk(v) for v in value)
        return self._scrub(value)

    def _scrub(self, value: Any) -> Any:
        if isinstance(value, str):
            return _BEARER.sub(lambda m: f"{m.group(1)} {self.REDACTED}", value)
        return value


__all__ = ["SensitiveFieldsFilter"]
