"""Observability – structured logging helpers."""
from policy_gateway.observability.logging.filters import SensitiveFieldsFilter
from policy_gateway.observability.logging.factory import JsonLoggerFactory, configure_logging
from policy_gateway.observability.logging.processors import CorrelationProcessor, get_logger

__all__ = [
    "CorrelationProcessor",
    "JsonLoggerFactory",
    "SensitiveFieldsFilter",
    "configure_logging",
    "get_logger",
]
