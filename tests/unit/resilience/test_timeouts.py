"""Unit tests for TimeoutPolicy."""

from __future__ import annotations

import asyncio

import pytest

from policy_gateway.kernel.errors import TimeoutError as AppTimeoutError
from policy_gateway.resilience.timeouts import TimeoutPolicy


class TestTimeoutPolicy:
    def test_fast_call_returns_result(self) -> None:
        async def fast() -> str:
            return "done"

        assert asyncio.run(TimeoutPolicy(1.0).execute(fast)) == "done"

    def test_slow_call_raises_app_timeout(self) -> None:
        async def slow() -> None:
            await asyncio.sleep(10)

        with pytest.raises(AppTimeoutError) as exc_info:
            asyncio.run(TimeoutPolicy(0.01).execute(slow))
        assert "0.01" in exc_info.value.message
        assert exc_info.value.detail == {"timeout_seconds": 0.01}

    def test_operation_named_in_message(self) -> None:
        async def slow() -> None:
            await asyncio.sleep(10)

        with pytest.raises(AppTimeoutError, match="policy decision timed out"):
            asyncio.run(TimeoutPolicy(0.01, operation="policy decision").execute(slow))

    @pytest.mark.parametrize("seconds", [0, -1.0])
    def test_non_positive_timeout_rejected(self, seconds: float) -> None:
        with pytest.raises(ValueError):
            TimeoutPolicy(seconds)

    def test_slow_call_is_cancelled(self) -> None:
        cancelled = False

        async def slow() -> None:
            nonlocal cancelled
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled = True
                raise

        with pytest.raises(AppTimeoutError):
            asyncio.run(TimeoutPolicy(0.01).execute(slow))
        assert cancelled

    def test_inner_exception_propagates(self) -> None:
        async def boom() -> None:
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            asyncio.run(TimeoutPolicy(1.0).execute(boom))
