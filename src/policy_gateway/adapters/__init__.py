"""Adapters – httpx, FastAPI/Starlette, Keycloak (PyJWT), Prometheus."""
