"""Resilience – RetryPolicy."""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from policy_gateway.resilience.retry.backoff import BackoffStrategy, ConstantBackoff
from policy_gateway.resilience.retry.jitter import JitterStrategy, NoJitter

T = TypeVar("T")
logger = logging.getLogger(__name__)

RetryListener = Callable[[int, Exception, float], None]


class RetryPolicy:
    """Bounded retry loop.

    ``max_attempts`` counts the first call, so ``max_attempts=3`` means one
    call plus at most two retries. Only ``retryable_exceptions`` are retried;
    anything else propagates from the failing attempt unchanged, as does the
    last retryable failure once attempts run out.

    *on_retry* is called as ``(attempt, exc, delay)`` before each wait.
    """

    def __init__(
        self,
        max_attempts: int = 3,
        backoff: BackoffStrategy | None = None,
        jitter: JitterStrategy | None = None,
        retryable_exceptions: tuple[type[Exception], ...] = (Exception,),
        on_retry: RetryListener | None = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.max_attempts = max_attempts
        self.backoff = backoff or ConstantBackoff(0.1)
        self.jitter = jitter or NoJitter()
        self.retryable_exceptions = retryable_exceptions
        self._on_retry = on_retry

    def max_total_delay(self) -> float:
        """Upper bound of the time spent sleeping between attempts (jitter only shortens it)."""
        return sum(self.backoff.delays(self.max_attempts - 1))

    async def execute_async(self, func: Callable[[], Awaitable[T]]) -> T:
        attempt = 1
        while True:
            try:
                return await func()
            except self.retryable_exceptions as exc:
                if attempt >= self.max_attempts:
                    raise
                delay = self.jitter.apply(self.backoff.compute(attempt))
                logger.debug("retry.scheduled attempt=%d delay=%.3fs exc=%r", attempt, delay, exc)
                if self._on_retry is not None:
                    self._on_retry(attempt, exc, delay)
                await asyncio.sleep(delay)
                attempt += 1


__all__ = ["RetryListener", "RetryPolicy"]
