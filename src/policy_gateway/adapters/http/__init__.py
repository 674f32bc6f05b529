"""HTTP adapter – async httpx client wrapper."""
from policy_gateway.adapters.http.client import HttpClient, HttpxHttpClient

__all__ = ["HttpClient", "HttpxHttpClient"]
