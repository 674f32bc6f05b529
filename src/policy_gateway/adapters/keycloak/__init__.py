"""Keycloak adapter – OIDC token verification."""
from policy_gateway.adapters.keycloak.jwks import JWKSClient
from policy_gateway.adapters.keycloak.verifier import SUBJECT_CLAIMS, OIDCTokenVerifier, SigningKeyProvider

__all__ = ["JWKSClient", "OIDCTokenVerifier", "SUBJECT_CLAIMS", "SigningKeyProvider"]
