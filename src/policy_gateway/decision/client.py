"""Decision – DecisionClient, the resilient policy-engine caller.

``decide`` resolves every engine-side failure to a fail-closed
:class:`DecisionResult`; only :class:`InvalidInputError` (a caller bug) is
raised. Per call:

1. validate the tuple;
2. ask the circuit breaker for a permit, short-circuit to deny if refused;
3. ``POST policy_path`` under a hard timeout;
4. retry engine failures (transport, timeout, non-2xx, unparseable body),
   reporting every failed attempt to the breaker;
5. on exhaustion log ``EngineUnavailableError`` and deny;
6. record duration and outcome metrics on every branch.
"""
from __future__ import annotations

import time
from typing import Any, Callable

import httpx

from policy_gateway.adapters.http import HttpxHttpClient
from policy_gateway.config.settings import GatewaySettings
from policy_gateway.decision.models import DecisionRequest, DecisionResult, DecisionSource
from policy_gateway.kernel.errors import (
    EngineUnavailableError,
    ExternalServiceError,
    TimeoutError as AppTimeoutError,
)
from policy_gateway.observability.logging import get_logger
from policy_gateway.observability.metrics import Metrics, NoopMetrics
from policy_gateway.resilience import (
    BackoffStrategy,
    CircuitBreaker,
    CircuitBreakerPolicy,
    CircuitBreakerState,
    CircuitOpenError,
    CircuitSnapshot,
    ConstantBackoff,
    JitterStrategy,
    NoJitter,
    RetryPolicy,
    TimeoutPolicy,
    backoff_for,
    jitter_for,
)

logger = get_logger(__name__)


class DecisionClient:
    """Call a remote policy engine with timeout, retry and circuit breaking.

    Parameters
    ----------
    base_url:
        Engine base URL, e.g. ``http://opa:8181``.
    policy_path:
        Decision endpoint relative to *base_url*.
    timeout_seconds:
        Per-attempt timeout; the attempt is abandoned, not just logged.
    max_retries:
        Retries after the first attempt.
    backoff / jitter:
        Delay between attempts (defaults: fixed 100 ms, no jitter).
    breaker_policy:
        Threshold and durations for the internal :class:`CircuitBreaker`.
    metrics:
        :class:`Metrics` backend; :class:`NoopMetrics` when omitted.
    http_client:
        Pre-built :class:`HttpxHttpClient`; the client is not closed by
        :meth:`aclose` when supplied by the caller.
    """

    def __init__(
        self,
        base_url: str,
        policy_path: str = "/v1/data/authz/allow",
        *,
        timeout_seconds: float = 2.0,
        max_retries: int = 2,
        backoff: BackoffStrategy | None = None,
        jitter: JitterStrategy | None = None,
        breaker_policy: CircuitBreakerPolicy | None = None,
        metrics: Metrics | None = None,
        http_client: HttpxHttpClient | None = None,
        correlation_header: str = "X-Request-ID",
        name: str = "policy-engine",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        self.name = name
        self._base_url = base_url
        self._policy_path = policy_path
        self._timeout = TimeoutPolicy(timeout_seconds, operation="policy decision")
        self._retry = RetryPolicy(
            max_attempts=max_retries + 1,
            backoff=backoff or ConstantBackoff(0.1),
            jitter=jitter or NoJitter(),
            retryable_exceptions=(EngineUnavailableError,),
            on_retry=self._on_retry,
        )
        self._owns_http = http_client is None
        self._http = http_client or HttpxHttpClient(
            base_url,
            # httpx gives up slightly after the hard timeout so TimeoutPolicy wins.
            timeout=httpx.Timeout(timeout_seconds * 1.5),
            correlation_header=correlation_header,
        )

        metrics = metrics or NoopMetrics()
        self._duration = metrics.histogram(
            "policy.decision.duration", "Time taken for policy decisions", "ms"
        )
        self._success = metrics.counter(
            "policy.decision.success", "Decisions answered by the policy engine"
        )
        self._failure = metrics.counter(
            "policy.decision.failure", "Decisions resolved by the fail-closed fallback"
        )
        self._state_gauge = metrics.gauge(
            "policy.circuit.state", "Circuit state (0=closed, 1=half-open, 2=open)"
        )
        self._state_gauge.set(CircuitBreakerState.CLOSED.gauge_value)
        self._breaker = CircuitBreaker(
            name,
            breaker_policy or CircuitBreakerPolicy(),
            clock=clock,
            on_transition=self._on_transition,
        )

        logger.info(
            "policy.client_initialized",
            url=base_url,
            policy_path=policy_path,
            timeout_s=timeout_seconds,
            max_retries=max_retries,
        )

    @classmethod
    def from_settings(
        cls,
        settings: GatewaySettings,
        *,
        metrics: Metrics | None = None,
        http_client: HttpxHttpClient | None = None,
    ) -> "DecisionClient":
        return cls(
            settings.url,
            settings.policy_path,
            timeout_seconds=settings.timeout_seconds,
            max_retries=settings.max_retries,
            backoff=backoff_for(settings.retry_backoff, settings.retry_delay_seconds),
            jitter=jitter_for(settings.retry_jitter),
            breaker_policy=CircuitBreakerPolicy(
                failure_threshold=settings.cb_failure_threshold,
                open_duration_seconds=settings.cb_open_duration_seconds,
                half_open_wait_seconds=settings.cb_half_open_wait_seconds,
            ),
            metrics=metrics,
            http_client=http_client,
            correlation_header=settings.correlation_header,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> "DecisionClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def circuit_state(self) -> CircuitBreakerState:
        return self._breaker.state

    def circuit_snapshot(self) -> CircuitSnapshot:
        return self._breaker.snapshot()

    def max_decision_seconds(self) -> float:
        """Upper bound for one ``decide`` call: every attempt times out plus all delays."""
        return self._timeout.timeout_seconds * self._retry.max_attempts + self._retry.max_total_delay()

    async def decide(self, subject: str, action: str, resource: str) -> DecisionResult:
        """Return the engine's decision for the tuple, or a fail-closed deny.

        Raises :class:`~policy_gateway.kernel.errors.InvalidInputError` when a
        field is blank; nothing is sent to the engine in that case.
        """
        request = DecisionRequest.create(subject, action, resource)
        return await self.decide_request(request)

    async def decide_request(self, request: DecisionRequest) -> DecisionResult:
        start = time.perf_counter()
        log = logger.bind(subject=request.subject, action=request.action, resource=request.resource)
        failures: list[EngineUnavailableError] = []
        try:
            allowed = await self._retry.execute_async(lambda: self._attempt(request, failures))
        except CircuitOpenError as exc:
            if failures:
                # the breaker tripped between retries
                last = failures[-1]
                log.error(
                    "policy.engine_unavailable",
                    error=last.message,
                    status_code=last.status_code,
                    attempts=len(failures),
                    circuit=self.name,
                )
            else:
                log.warning("policy.circuit_open", circuit=self.name, retry_after_s=exc.retry_after)
            return self._fallback(start)
        except EngineUnavailableError as exc:
            log.error(
                "policy.engine_unavailable",
                error=exc.message,
                status_code=exc.status_code,
                attempts=len(failures),
            )
            return self._fallback(start)
        except Exception as exc:  # noqa: BLE001
            log.exception("policy.decision_failed", error=repr(exc))
            return self._fallback(start)

        result = DecisionResult(
            allowed=allowed,
            latency_ms=(time.perf_counter() - start) * 1000,
            source=DecisionSource.ENGINE,
        )
        self._success.add(1.0)
        self._duration.record(result.latency_ms, {"outcome": "allow" if allowed else "deny"})
        log.info("policy.decision", allowed=allowed, latency_ms=round(result.latency_ms, 2))
        return result

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _fallback(self, start: float) -> DecisionResult:
        result = DecisionResult(
            allowed=False,
            latency_ms=(time.perf_counter() - start) * 1000,
            source=DecisionSource.FALLBACK,
        )
        self._failure.add(1.0)
        self._duration.record(result.latency_ms, {"outcome": "error"})
        return result

    async def _attempt(self, request: DecisionRequest, failures: list[EngineUnavailableError]) -> bool:
        if not self._breaker.acquire():
            raise CircuitOpenError(self.name, retry_after=self._breaker.retry_after())
        try:
            allowed = await self._invoke(request)
        except EngineUnavailableError as exc:
            logger.warning("policy.engine_attempt_failed", error=exc.message, status_code=exc.status_code)
            self._breaker.record_failure()
            failures.append(exc)
            raise
        except BaseException:
            # cancelled or unexpected: no outcome to report
            self._breaker.release()
            raise
        self._breaker.record_success()
        return allowed

    async def _invoke(self, request: DecisionRequest) -> bool:
        try:
            response = await self._timeout.execute(
                lambda: self._http.post(self._policy_path, json=request.to_input())
            )
        except AppTimeoutError as exc:
            raise EngineUnavailableError(
                self.name, f"Policy engine timed out after {self._timeout.timeout_seconds}s", cause=exc
            ) from exc
        except ExternalServiceError as exc:
            raise EngineUnavailableError(
                self.name, exc.message, status_code=exc.status_code, cause=exc
            ) from exc
        return self._parse(response)

    def _parse(self, response: httpx.Response) -> bool:
        try:
            body = response.json()
        except ValueError as exc:
            raise EngineUnavailableError(
                self.name, "Policy engine returned a non-JSON body", status_code=response.status_code, cause=exc
            ) from exc
        result = body.get("result") if isinstance(body, dict) else None
        if not isinstance(result, bool):
            raise EngineUnavailableError(
                self.name, "Policy engine response has no boolean 'result'", status_code=response.status_code
            )
        return result

    def _on_retry(self, attempt: int, exc: Exception, delay: float) -> None:
        logger.info("policy.retry_scheduled", attempt=attempt, delay_s=round(delay, 3), error=repr(exc))

    def _on_transition(self, old: CircuitBreakerState, new: CircuitBreakerState) -> None:
        self._state_gauge.set(new.gauge_value)
        logger.warning("policy.circuit_transition", circuit=self.name, previous=old.value, state=new.value)


__all__ = ["DecisionClient"]
