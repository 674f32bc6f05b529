"""Kernel security – default sensitive field names for log redaction."""
from __future__ import annotations

DEFAULT_SENSITIVE_FIELDS: frozenset[str] = frozenset({
    "password", "passwd", "secret", "token", "access_token", "refresh_token",
    "id_token", "api_key", "apikey", "authorization", "client_secret", "cookie",
})

__all__ = ["DEFAULT_SENSITIVE_FIELDS"]
