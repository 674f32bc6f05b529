"""Testing fixtures – pytest fixtures for gateway tests.

Requires pytest, which ships with the ``test`` extra
(``pip install policy-gateway[test]``); ``policy_gateway.testing`` itself does
not import this module. Register it in your ``conftest.py``::

    pytest_plugins = ["policy_gateway.testing.fixtures"]
"""
from __future__ import annotations

from typing import Iterator

import pytest

from policy_gateway.kernel.security import Principal, SecurityContext
from policy_gateway.observability.correlation import CorrelationContext, RequestContext
from policy_gateway.testing.fakes import FakeMetricsRegistry, FakeTokenVerifier, ManualClock


@pytest.fixture
def fake_metrics() -> FakeMetricsRegistry:
    return FakeMetricsRegistry()


@pytest.fixture
def manual_clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def token_verifier() -> FakeTokenVerifier:
    return FakeTokenVerifier()


@pytest.fixture
def fake_principal() -> Principal:
    """A principal with subject ``"test-user"`` and no roles."""
    return Principal(subject="test-user")


@pytest.fixture
def security_context(fake_principal: Principal) -> Iterator[Principal]:
    """Make *fake_principal* the current principal for the test."""
    with SecurityContext.bound(fake_principal):
        yield fake_principal


@pytest.fixture
def correlation_fixture() -> Iterator[RequestContext]:
    ctx = RequestContext(correlation_id="test-correlation-id")
    token = CorrelationContext.set(ctx)
    yield ctx
    CorrelationContext.reset(token)


__all__ = [
    "correlation_fixture",
    "fake_metrics",
    "fake_principal",
    "manual_clock",
    "security_context",
    "token_verifier",
]
