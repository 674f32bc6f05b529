"""Unit tests for CorrelationContext and bind_correlation."""

from __future__ import annotations

import asyncio
import uuid

import pytest
import structlog

from policy_gateway.observability.correlation import CorrelationContext, RequestContext, bind_correlation


class TestCorrelationContext:
    def setup_method(self) -> None:
        CorrelationContext.clear()

    def test_set_and_get(self) -> None:
        ctx = RequestContext.new()
        CorrelationContext.set(ctx)
        assert CorrelationContext.get() is ctx

    def test_get_returns_none_when_unset(self) -> None:
        assert CorrelationContext.get() is None

    def test_require_raises_when_unset(self) -> None:
        with pytest.raises(RuntimeError):
            CorrelationContext.require()

    def test_get_or_new_creates_once(self) -> None:
        ctx = CorrelationContext.get_or_new()
        assert CorrelationContext.get_or_new() is ctx

    def test_reset_restores_previous(self) -> None:
        outer = RequestContext("outer")
        CorrelationContext.set(outer)
        token = CorrelationContext.set(RequestContext("inner"))
        CorrelationContext.reset(token)
        assert CorrelationContext.get() is outer

    def test_isolated_between_tasks(self) -> None:
        async def worker(cid: str) -> str:
            CorrelationContext.set(RequestContext(cid))
            await asyncio.sleep(0)
            return CorrelationContext.require().correlation_id

        async def run() -> list[str]:
            return list(await asyncio.gather(worker("a"), worker("b")))

        assert asyncio.run(run()) == ["a", "b"]


# ---------------------------------------------------------------------------
# Header resolution
# ---------------------------------------------------------------------------


class TestResolveId:
    NAMES = ("X-Request-ID", "X-Correlation-ID", "traceparent")

    def test_primary_header_wins(self) -> None:
        headers = {"x-request-id": "req-1", "x-correlation-id": "corr-1"}
        assert CorrelationContext.resolve_id(headers, self.NAMES) == "req-1"

    def test_fallback_header(self) -> None:
        assert CorrelationContext.resolve_id({"X-Correlation-ID": "corr-1"}, self.NAMES) == "corr-1"

    def test_blank_header_skipped(self) -> None:
        headers = {"x-request-id": "  ", "x-correlation-id": "corr-1"}
        assert CorrelationContext.resolve_id(headers, self.NAMES) == "corr-1"

    def test_traceparent_trace_id(self) -> None:
        headers = {"traceparent": "00-4bf92f3577b34da6a3ce929d0e0e4736-00f067aa0ba902b7-01"}
        assert CorrelationContext.resolve_id(headers, self.NAMES) == "4bf92f3577b34da6a3ce929d0e0e4736"

    def test_malformed_traceparent_ignored(self) -> None:
        generated = CorrelationContext.resolve_id({"traceparent": "garbage"}, self.NAMES)
        uuid.UUID(generated)

    def test_generates_uuid_when_absent(self) -> None:
        first = CorrelationContext.resolve_id({}, self.NAMES)
        second = CorrelationContext.resolve_id({}, self.NAMES)
        uuid.UUID(first)
        assert first != second


# ---------------------------------------------------------------------------
# bind_correlation
# ---------------------------------------------------------------------------


class TestBindCorrelation:
    def setup_method(self) -> None:
        CorrelationContext.clear()
        structlog.contextvars.clear_contextvars()

    def test_binds_and_unbinds(self) -> None:
        with bind_correlation(RequestContext("cid-1")) as ctx:
            assert ctx.correlation_id == "cid-1"
            assert CorrelationContext.require() is ctx
            assert structlog.contextvars.get_contextvars()["correlation_id"] == "cid-1"
        assert CorrelationContext.get() is None
        assert "correlation_id" not in structlog.contextvars.get_contextvars()

    def test_unbinds_on_exception(self) -> None:
        with pytest.raises(ValueError):
            with bind_correlation(RequestContext("cid-2")):
                raise ValueError("boom")
        assert CorrelationContext.get() is None
        assert "correlation_id" not in structlog.contextvars.get_contextvars()

    def test_log_events_carry_id(self) -> None:
        capture = structlog.testing.LogCapture()
        structlog.configure(processors=[structlog.contextvars.merge_contextvars, capture])
        try:
            with bind_correlation(RequestContext("cid-3")):
                structlog.get_logger("t").info("inside")
            structlog.get_logger("t").info("outside")
        finally:
            structlog.reset_defaults()
        assert capture.entries[0]["correlation_id"] == "cid-3"
        assert "correlation_id" not in capture.entries[1]
