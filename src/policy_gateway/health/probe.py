"""Health – HealthProbe, on-demand and periodic engine probing."""
from __future__ import annotations

import asyncio
import logging
from typing import Any

from policy_gateway.observability.health import HealthCheck, HealthStatus

logger = logging.getLogger(__name__)


class HealthProbe(HealthCheck):
    """Run a :class:`HealthCheck` on demand or every *interval* seconds.

    The latest result is kept in :attr:`last_status`. A probe is itself a
    :class:`HealthCheck`, so registering it with a :class:`HealthRegistry`
    refreshes the cached status on every health request.
    Enforcement never reads it. An *interval* of ``0`` disables the
    background loop; :meth:`probe` still works.

    Usage::

        async with HealthProbe(PolicyEngineHealthCheck(url), interval=15) as probe:
            ...
    """

    def __init__(self, check: HealthCheck, interval: float = 0.0) -> None:
        if interval < 0:
            raise ValueError("interval must be >= 0")
        self._check = check
        self._interval = interval
        self._last: HealthStatus | None = None
        self._task: asyncio.Task[None] | None = None
        self._running = False

    @property
    def name(self) -> str:
        return self._check.name

    @property
    def target(self) -> HealthCheck:
        return self._check

    @property
    def last_status(self) -> HealthStatus | None:
        return self._last

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def probe(self) -> HealthStatus:
        """Run the check once and remember the result."""
        try:
            status = await self._check.timed_check()
        except Exception as exc:  # noqa: BLE001
            logger.warning("health.probe_raised name=%s exc=%r", self._check.name, exc)
            status = HealthStatus.down(f"exception: {exc}")
        previous = self._last
        self._last = status
        if previous is None or previous.healthy != status.healthy:
            log = logger.info if status.healthy else logger.warning
            log(
                "health.status_changed name=%s healthy=%s detail=%s",
                self._check.name, status.healthy, status.detail,
            )
        return status

    async def check(self) -> HealthStatus:
        return await self.probe()

    async def start(self) -> None:
        """Start the background probe loop (no-op when the interval is 0)."""
        if self._interval <= 0 or self.running:
            return
        self._running = True
        self._task = asyncio.create_task(self._probe_loop())

    async def stop(self) -> None:
        self._running = False
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

    async def __aenter__(self) -> "HealthProbe":
        await self.start()
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.stop()

    async def _probe_loop(self) -> None:
        while self._running:
            await self.probe()
            await asyncio.sleep(self._interval)


__all__ = ["HealthProbe"]
