"""Enforcement – per-request policy enforcement for ASGI apps."""
from policy_gateway.enforcement.filter import DEFAULT_SKIP_PATHS, EnforcementFilter
from policy_gateway.enforcement.responses import ERROR_STATUS, error_response, send_json, status_for
from policy_gateway.enforcement.skip import SkipList

__all__ = [
    "DEFAULT_SKIP_PATHS",
    "ERROR_STATUS",
    "EnforcementFilter",
    "SkipList",
    "error_response",
    "send_json",
    "status_for",
]
