"""Resilience – bounded retry with configurable backoff and jitter strategies."""
from policy_gateway.resilience.retry.backoff import BackoffStrategy, ConstantBackoff, ExponentialBackoff, backoff_for
from policy_gateway.resilience.retry.jitter import FullJitter, JitterStrategy, NoJitter, jitter_for
from policy_gateway.resilience.retry.policy import RetryListener, RetryPolicy

__all__ = [
    "BackoffStrategy", "ConstantBackoff", "ExponentialBackoff", "FullJitter",
    "JitterStrategy", "NoJitter", "RetryListener", "RetryPolicy", "backoff_for", "jitter_for",
]
