"""Resilience – CircuitBreaker state machine.

::

    CLOSED --consecutive failures >= threshold--> OPEN
    OPEN --open_duration elapsed, next acquire--> HALF_OPEN
    HALF_OPEN --success--> CLOSED
    HALF_OPEN --failure--> OPEN

The breaker never wraps the protected call itself while holding its lock:
callers ``acquire()`` a permit, perform the call, then report the outcome
with ``record_success()`` / ``record_failure()`` (or ``release()`` when the
call was abandoned without an outcome).
"""
from __future__ import annotations

import dataclasses
import logging
import threading
import time
from typing import Awaitable, Callable, TypeVar

from policy_gateway.resilience.circuit_breaker.errors import CircuitOpenError
from policy_gateway.resilience.circuit_breaker.policy import CircuitBreakerPolicy
from policy_gateway.resilience.circuit_breaker.state import CircuitBreakerState

T = TypeVar("T")
logger = logging.getLogger(__name__)

TransitionListener = Callable[[CircuitBreakerState, CircuitBreakerState], None]


@dataclasses.dataclass(frozen=True)
class CircuitSnapshot:
    """Point-in-time copy of the breaker's state and counters."""
    state: CircuitBreakerState
    consecutive_failures: int
    open_since: float | None
    open_until: float | None


class CircuitBreaker:
    """Thread-safe circuit breaker; the lock only guards check-and-flip steps."""

    def __init__(
        self,
        name: str,
        policy: CircuitBreakerPolicy | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        on_transition: TransitionListener | None = None,
    ) -> None:
        self.name = name
        self._policy = policy or CircuitBreakerPolicy()
        self._clock = clock
        self._on_transition = on_transition
        self._state = CircuitBreakerState.CLOSED
        self._failure_count = 0
        self._opened_at: float | None = None
        self._open_until: float | None = None
        self._trial_started_at: float | None = None
        self._lock = threading.Lock()

    @property
    def state(self) -> CircuitBreakerState:
        return self._state

    @property
    def policy(self) -> CircuitBreakerPolicy:
        return self._policy

    def snapshot(self) -> CircuitSnapshot:
        with self._lock:
            return CircuitSnapshot(
                state=self._state,
                consecutive_failures=self._failure_count,
                open_since=self._opened_at,
                open_until=self._open_until,
            )

    def retry_after(self) -> float | None:
        """Seconds until an OPEN breaker admits a trial; ``None`` when not OPEN."""
        with self._lock:
            if self._state != CircuitBreakerState.OPEN or self._open_until is None:
                return None
            return max(self._open_until - self._clock(), 0.0)

    def acquire(self) -> bool:
        """Return ``True`` when a call may proceed, ``False`` to short-circuit."""
        with self._lock:
            now = self._clock()
            transition = None
            if self._state == CircuitBreakerState.OPEN:
                if self._open_until is not None and now < self._open_until:
                    return False
                transition = self._set_state(CircuitBreakerState.HALF_OPEN)
                self._trial_started_at = now
                permitted = True
            elif self._state == CircuitBreakerState.HALF_OPEN:
                if (
                    self._trial_started_at is not None
                    and now - self._trial_started_at < self._policy.half_open_wait_seconds
                ):
                    return False
                self._trial_started_at = now
                permitted = True
            else:
                permitted = True
        self._notify(transition)
        return permitted

    def record_success(self) -> None:
        with self._lock:
            transition = None
            self._failure_count = 0
            if self._state == CircuitBreakerState.HALF_OPEN:
                transition = self._set_state(CircuitBreakerState.CLOSED)
                self._trial_started_at = None
                self._opened_at = None
                self._open_until = None
        self._notify(transition)

    def record_failure(self) -> None:
        with self._lock:
            transition = None
            if self._state == CircuitBreakerState.HALF_OPEN:
                transition = self._trip()
            elif self._state == CircuitBreakerState.CLOSED:
                self._failure_count += 1
                logger.warning(
                    "circuit_breaker.failure name=%s count=%d threshold=%d",
                    self.name, self._failure_count, self._policy.failure_threshold,
                )
                if self._failure_count >= self._policy.failure_threshold:
                    transition = self._trip()
        self._notify(transition)

    def release(self) -> None:
        """Give back a HALF_OPEN trial permit whose call produced no outcome."""
        with self._lock:
            if self._state == CircuitBreakerState.HALF_OPEN:
                self._trial_started_at = None

    async def call(self, func: Callable[[], Awaitable[T]]) -> T:
        """Run *func* under the breaker, raising :class:`CircuitOpenError` when refused."""
        if not self.acquire():
            raise CircuitOpenError(self.name, retry_after=self.retry_after())
        try:
            result = await func()
        except Exception as exc:
            if isinstance(exc, self._policy.excluded_exceptions):
                self.release()
            else:
                self.record_failure()
            raise
        except BaseException:
            self.release()
            raise
        self.record_success()
        return result

    def _trip(self) -> tuple[CircuitBreakerState, CircuitBreakerState] | None:
        now = self._clock()
        transition = self._set_state(CircuitBreakerState.OPEN)
        self._opened_at = now
        self._open_until = now + self._policy.open_duration_seconds
        self._failure_count = 0
        self._trial_started_at = None
        logger.error("circuit_breaker.opened name=%s open_for=%.3fs", self.name, self._policy.open_duration_seconds)
        return transition

    def _set_state(self, new: CircuitBreakerState) -> tuple[CircuitBreakerState, CircuitBreakerState] | None:
        old = self._state
        if old == new:
            return None
        self._state = new
        logger.info("circuit_breaker.transition name=%s from=%s to=%s", self.name, old.value, new.value)
        return old, new

    def _notify(self, transition: tuple[CircuitBreakerState, CircuitBreakerState] | None) -> None:
        if transition is not None and self._on_transition is not None:
            self._on_transition(*transition)


__all__ = ["CircuitBreaker", "CircuitSnapshot", "TransitionListener"]
