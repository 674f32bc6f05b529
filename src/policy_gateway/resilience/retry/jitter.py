"""Resilience – jitter strategies."""
from __future__ import annotations

import abc
import random


class JitterStrategy(abc.ABC):
    """Randomise a backoff delay so that gateways retrying together drift apart."""

    @abc.abstractmethod
    def apply(self, delay: float) -> float: ...


class NoJitter(JitterStrategy):
    def apply(self, delay: float) -> float:
        return delay


class FullJitter(JitterStrategy):
    """Uniform random in ``[0, delay]``; pass a seeded *rng* for repeatable delays."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def apply(self, delay: float) -> float:
        return self._rng.uniform(0, delay)


def jitter_for(enabled: bool) -> JitterStrategy:
    """Build the strategy selected by the ``retry_jitter`` setting."""
    return FullJitter() if enabled else NoJitter()


__all__ = ["FullJitter", "JitterStrategy", "NoJitter", "jitter_for"]
