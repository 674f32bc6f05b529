"""Resilience – TimeoutPolicy."""
from __future__ import annotations

import asyncio
import dataclasses
from typing import Awaitable, Callable, TypeVar

from policy_gateway.kernel.errors import TimeoutError as AppTimeoutError

T = TypeVar("T")


@dataclasses.dataclass(frozen=True)
class TimeoutPolicy:
    """Hard per-call deadline.

    The awaited call is cancelled once ``timeout_seconds`` elapse and an
    application :class:`~policy_gateway.kernel.errors.TimeoutError` naming
    *operation* is raised in its place.
    """
    timeout_seconds: float
    operation: str = "operation"

    def __post_init__(self) -> None:
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")

    async def execute(self, func: Callable[[], Awaitable[T]]) -> T:
        try:
            return await asyncio.wait_for(func(), timeout=self.timeout_seconds)
        except asyncio.TimeoutError as exc:
            raise AppTimeoutError(
                f"{self.operation} timed out after {self.timeout_seconds}s",
                detail={"timeout_seconds": self.timeout_seconds},
            ) from exc


__all__ = ["TimeoutPolicy"]
