"""Keycloak adapter – JWKSClient backed by PyJWT."""
from __future__ import annotations

import asyncio
from typing import Any

import jwt


class JWKSClient:
    """Signing-key lookup for bearer tokens, backed by :class:`jwt.PyJWKClient`.

    The underlying client is built on first use, keeps the fetched key set for
    *cache_ttl* seconds and gives up on the identity provider after
    *timeout* seconds. A token whose ``kid`` is not in the cached set makes
    PyJWT refetch the set once before failing.
    """

    def __init__(self, jwks_uri: str, cache_ttl: float = 300.0, timeout: float = 5.0) -> None:
        if not jwks_uri:
            raise ValueError("jwks_uri must not be empty")
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        self._jwks_uri = jwks_uri
        self._cache_ttl = cache_ttl
        self._timeout = timeout
        self._client: jwt.PyJWKClient | None = None

    @property
    def jwks_uri(self) -> str:
        return self._jwks_uri

    def _get_client(self) -> jwt.PyJWKClient:
        if self._client is None:
            self._client = jwt.PyJWKClient(
                self._jwks_uri,
                cache_jwk_set=True,
                lifespan=max(int(self._cache_ttl), 1),
                timeout=max(int(self._timeout), 1),
            )
        return self._client

    async def get_signing_key(self, token: str) -> Any:
        # PyJWKClient blocks on a cache miss.
        return await asyncio.to_thread(self._get_client().get_signing_key_from_jwt, token)

    def invalidate(self) -> None:
        self._client = None


__all__ = ["JWKSClient"]
