"""Resilience – backoff strategies.

``attempt`` is 1-based: ``compute(1)`` is the wait after the first failed
call, before the first retry.
"""
from __future__ import annotations

import abc
import dataclasses


class BackoffStrategy(abc.ABC):
    @abc.abstractmethod
    def compute(self, attempt: int) -> float: ...

    def delays(self, retries: int) -> list[float]:
        """The waits before each of *retries* retries."""
        return [self.compute(a) for a in range(1, retries + 1)]


@dataclasses.dataclass(frozen=True)
class ConstantBackoff(BackoffStrategy):
    """``retry_backoff=fixed``: the same delay before every retry."""
    delay: float = 1.0

    def compute(self, attempt: int) -> float:  # noqa: ARG002
        return self.delay


@dataclasses.dataclass(frozen=True)
class ExponentialBackoff(BackoffStrategy):
    """``retry_backoff=exponential``: ``base_delay * 2^(attempt - 1)``, capped at ``max_delay``."""
    base_delay: float = 0.1
    max_delay: float = 30.0

    def compute(self, attempt: int) -> float:
        return min(self.base_delay * (2 ** max(attempt - 1, 0)), self.max_delay)


def backoff_for(name: str, delay: float) -> BackoffStrategy:
    """Build the strategy named by the ``retry_backoff`` setting."""
    if name == "exponential":
        return ExponentialBackoff(base_delay=delay)
    if name == "fixed":
        return ConstantBackoff(delay)
    raise ValueError(f"unknown backoff strategy {name!r}")


__all__ = ["BackoffStrategy", "ConstantBackoff", "ExponentialBackoff", "backoff_for"]
