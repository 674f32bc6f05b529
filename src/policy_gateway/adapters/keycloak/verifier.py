"""Keycloak adapter – OIDCTokenVerifier using PyJWT."""
from __future__ import annotations

from typing import Any, Protocol

import jwt

from policy_gateway.kernel.errors import UnauthorizedError
from policy_gateway.kernel.security import Principal, Role

# First non-blank claim wins.
SUBJECT_CLAIMS: tuple[str, ...] = ("preferred_username", "sub", "name")


class SigningKeyProvider(Protocol):
    async def get_signing_key(self, token: str) -> Any: ...


class OIDCTokenVerifier:
    """Verify a Bearer JWT and extract a :class:`Principal`.

    Parameters
    ----------
    jwks_client:
        A :class:`JWKSClient`, or anything with an async
        ``get_signing_key(token)`` returning an object with a ``key``.
    audience:
        Expected ``aud`` claim; an empty value skips the audience check.
    algorithms:
        Allowed signature algorithms. Defaults to ``["RS256"]``.
    realm_roles_claim:
        Dot-separated path to the list of realm roles inside the claims.
    """

    def __init__(
        self,
        jwks_client: SigningKeyProvider,
        audience: str = "",
        algorithms: list[str] | None = None,
        realm_roles_claim: str = "realm_access.roles",
    ) -> None:
        self._jwks = jwks_client
        self._audience = audience
        self._algorithms = algorithms or ["RS256"]
        self._realm_roles_claim = realm_roles_claim

    async def verify(self, token: str) -> Principal:
        """Verify *token* and return its :class:`Principal`.

        Raises :class:`~policy_gateway.kernel.errors.UnauthorizedError` on any
        verification failure and when no subject claim is present.
        """
        options = {} if self._audience else {"verify_aud": False}
        try:
            signing_key = await self._jwks.get_signing_key(token)
            claims: dict[str, Any] = jwt.decode(
                token,
                signing_key.key,
                algorithms=self._algorithms,
                audience=self._audience or None,
                options=options,
            )
        except jwt.InvalidTokenError as exc:
            raise UnauthorizedError(f"Invalid token: {exc}") from exc
        except Exception as exc:  # network errors, etc.
            raise UnauthorizedError(f"Token verification failed: {exc}") from exc

        subject = self._extract_subject(claims)
        if subject is None:
            raise UnauthorizedError("Token carries no usable subject claim")
        return Principal(
            subject=subject,
            roles=frozenset(Role(r) for r in self._extract_roles(claims)),
            claims=dict(claims),
        )

    @staticmethod
    def _extract_subject(claims: dict[str, Any]) -> str | None:
        for name in SUBJECT_CLAIMS:
            value = claims.get(name)
            if isinstance(value, str) and value.strip():
                return value
        return None

    def _extract_roles(self, claims: dict[str, Any]) -> list[str]:
        node: Any = claims
        for part in self._realm_roles_claim.split("."):
            if not isinstance(node, dict):
                return []
            node = node.get(part)
        if isinstance(node, list):
            return [r for r in node if isinstance(r, str)]
        return []


__all__ = ["OIDCTokenVerifier", "SUBJECT_CLAIMS", "SigningKeyProvider"]
