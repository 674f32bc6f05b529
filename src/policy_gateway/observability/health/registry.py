"""Observability – HealthRegistry and the aggregated HealthReport."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from policy_gateway.observability.health.check import HealthCheck, HealthStatus

__all__ = ["HealthReport", "HealthRegistry"]

logger = logging.getLogger(__name__)


@dataclass
class HealthReport:
    """Results keyed by check name; UP only when every check is UP."""

    results: dict[str, HealthStatus] = field(default_factory=dict)

    @property
    def overall(self) -> bool:
        return all(s.healthy for s in self.results.values())

    def to_dict(self) -> dict[str, Any]:
        checks = {
            name: {"status": s.label, "detail": s.detail, "latency_ms": round(s.latency_ms, 2)}
            for name, s in self.results.items()
        }
        return {"status": "UP" if self.overall else "DOWN", "checks": checks}


class HealthRegistry:
    """Runs registered checks in registration order.

    A check that raises is reported DOWN with the exception text; it never
    aborts the remaining checks.
    """

    def __init__(self) -> None:
        self._checks: list[HealthCheck] = []

    @property
    def names(self) -> list[str]:
        return [c.name for c in self._checks]

    def register(self, check: HealthCheck) -> None:
        if check.name in self.names:
            raise ValueError(f"health check {check.name!r} is already registered")
        self._checks.append(check)

    async def run_all(self) -> HealthReport:
        report = HealthReport()
        for check in self._checks:
            try:
                status = await check.timed_check()
            except Exception as exc:  # noqa: BLE001
                logger.warning("health.check_raised name=%s exc=%r", check.name, exc)
                status = HealthStatus.down(f"exception: {exc}")
            report.results[check.name] = status
        return report
