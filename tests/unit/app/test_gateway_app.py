"""End-to-end tests – the demo gateway application."""
from __future__ import annotations

import json
from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient
from prometheus_client import CollectorRegistry

from policy_gateway.adapters.http import HttpxHttpClient
from policy_gateway.adapters.prometheus import PrometheusMetrics
from policy_gateway.app import create_app
from policy_gateway.config.settings import GatewaySettings
from policy_gateway.decision import DecisionClient
from policy_gateway.resilience import ConstantBackoff
from policy_gateway.testing import FakeTokenVerifier

ENGINE = "http://127.0.0.1:1"


def alice_reads_documents(request: httpx.Request) -> httpx.Response:
    data = json.loads(request.content)["input"]
    allowed = data["user"] == "alice" and data["action"] == "read" and data["resource"].startswith("document:")
    return httpx.Response(200, json={"result": allowed})


class Gateway:
    def __init__(self) -> None:
        self.engine_calls: list[dict[str, Any]] = []
        self.verifier = FakeTokenVerifier()
        self.metrics = PrometheusMetrics(CollectorRegistry())

        def recording(request: httpx.Request) -> httpx.Response:
            self.engine_calls.append(json.loads(request.content)["input"])
            return alice_reads_documents(request)

        settings = GatewaySettings(url=ENGINE, health_timeout_ms=500)
        self.decision_client = DecisionClient(
            ENGINE,
            max_retries=0,
            backoff=ConstantBackoff(0.0),
            metrics=self.metrics,
            http_client=HttpxHttpClient(ENGINE, transport=httpx.MockTransport(recording)),
        )
        self.app = create_app(
            settings,
            decision_client=self.decision_client,
            verifier=self.verifier.verify,
            metrics=self.metrics,
        )
        self.client = TestClient(self.app)

    def auth(self, user: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.verifier.issue(user)}"}


@pytest.fixture
def gateway() -> Gateway:
    return Gateway()


class TestDocumentRoute:
    def test_alice_reads_her_document(self, gateway: Gateway) -> None:
        resp = gateway.client.get("/api/users/alice/documents/7", headers=gateway.auth("alice"))
        assert resp.status_code == 200
        assert resp.json() == {
            "document_id": "7",
            "owner": "alice",
            "content": "Document 7 content for user alice",
        }
        assert gateway.engine_calls == [{"user": "alice", "action": "read", "resource": "document:7"}]

    def test_bob_is_denied_with_correlation_header(self, gateway: Gateway) -> None:
        resp = gateway.client.get("/api/users/bob/documents/7", headers=gateway.auth("bob"))
        assert resp.status_code == 403
        assert resp.json()["code"] == "access_denied"
        assert resp.headers["x-request-id"] == resp.json()["correlation_id"]

    def test_missing_identity_is_401(self, gateway: Gateway) -> None:
        resp = gateway.client.get("/api/users/alice/documents/7")
        assert resp.status_code == 401
        assert resp.json()["code"] == "unauthorized"
        assert resp.headers["www-authenticate"] == "Bearer"
        assert "x-request-id" in resp.headers
        assert gateway.engine_calls == []

    def test_explicit_action_gets_second_decision(self, gateway: Gateway) -> None:
        resp = gateway.client.get(
            "/api/users/alice/documents/7",
            params={"action": "write"},
            headers=gateway.auth("alice"),
        )
        assert resp.status_code == 403
        assert resp.json()["code"] == "access_denied"
        assert [c["action"] for c in gateway.engine_calls] == ["read", "write"]

    def test_blank_action_is_400(self, gateway: Gateway) -> None:
        resp = gateway.client.get(
            "/api/users/alice/documents/7",
            params={"action": " "},
            headers=gateway.auth("alice"),
        )
        assert resp.status_code == 400
        assert resp.json()["code"] == "invalid_input"


class TestCheckAccess:
    def test_subject_comes_from_token(self, gateway: Gateway) -> None:
        resp = gateway.client.post(
            "/api/check-access",
            json={"user": "bob", "action": "read", "resource": "document:1"},
            headers=gateway.auth("alice"),
        )
        assert resp.status_code == 200
        assert resp.json() == {"allowed": True}
        assert gateway.engine_calls == [{"user": "alice", "action": "read", "resource": "document:1"}]

    def test_requires_identity(self, gateway: Gateway) -> None:
        resp = gateway.client.post("/api/check-access", json={"action": "read", "resource": "document:1"})
        assert resp.status_code == 401

    def test_public_variant(self, gateway: Gateway) -> None:
        allowed = gateway.client.post(
            "/api/public/check-access", json={"user": "alice", "action": "read", "resource": "document:1"}
        )
        denied = gateway.client.post(
            "/api/public/check-access", json={"user": "bob", "action": "read", "resource": "document:1"}
        )
        assert allowed.json() == {"allowed": True}
        assert denied.json() == {"allowed": False}

    def test_public_blank_user_is_400(self, gateway: Gateway) -> None:
        resp = gateway.client.post(
            "/api/public/check-access", json={"user": "", "action": "read", "resource": "document:1"}
        )
        assert resp.status_code == 400
        assert resp.json()["errors"] == [{"field": "subject", "message": "must not be blank"}]
        assert gateway.engine_calls == []

    def test_public_missing_field_is_400(self, gateway: Gateway) -> None:
        resp = gateway.client.post("/api/public/check-access", json={"user": "alice"})
        assert resp.status_code == 400
        fields = {e["field"] for e in resp.json()["errors"]}
        assert fields == {"action", "resource"}


class TestOps:
    def test_prometheus_exposition(self, gateway: Gateway) -> None:
        gateway.client.get("/api/users/alice/documents/7", headers=gateway.auth("alice"))
        resp = gateway.client.get("/actuator/prometheus")
        assert resp.status_code == 200
        assert "policy_decision_duration" in resp.text
        assert "policy_decision_success_total 1.0" in resp.text

    def test_health_reports_engine_down(self, gateway: Gateway) -> None:
        resp = gateway.client.get("/actuator/health")
        assert resp.status_code == 503
        body = resp.json()
        assert body["status"] == "DOWN"
        assert body["checks"]["policy_engine"]["status"] == "DOWN"
        assert body["circuit"] == {"state": "CLOSED"}
        assert gateway.app.state.health_probe.last_status.healthy is False

    def test_liveness(self, gateway: Gateway) -> None:
        assert gateway.client.get("/actuator/health/live").json() == {"status": "UP"}

    def test_lifespan_runs(self, gateway: Gateway) -> None:
        with TestClient(gateway.app) as client:
            assert client.get("/actuator/health/live").status_code == 200
