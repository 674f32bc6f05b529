"""Observability – HealthCheck port and HealthStatus result."""
from __future__ import annotations

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass

__all__ = ["HealthCheck", "HealthStatus"]


@dataclass
class HealthStatus:
    """Outcome of one check; ``detail`` says what was probed or what failed."""

    healthy: bool
    detail: str | None = None
    latency_ms: float = 0.0

    @classmethod
    def up(cls, detail: str | None = None) -> "HealthStatus":
        return cls(healthy=True, detail=detail)

    @classmethod
    def down(cls, detail: str) -> "HealthStatus":
        return cls(healthy=False, detail=detail)

    @property
    def label(self) -> str:
        return "UP" if self.healthy else "DOWN"


class HealthCheck(ABC):
    """A named, async reachability check."""

    @property
    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    async def check(self) -> HealthStatus: ...

    async def timed_check(self) -> HealthStatus:
        """Run :meth:`check` and stamp the wall time it took on the result."""
        start = time.monotonic()
        status = await self.check()
        status.latency_ms = (time.monotonic() - start) * 1000
        return status
