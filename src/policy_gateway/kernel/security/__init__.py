"""Kernel security – Principal, SecurityContext, sensitive fields."""
from policy_gateway.kernel.security.principal import Principal, Role
from policy_gateway.kernel.security.pii import DEFAULT_SENSITIVE_FIELDS
from policy_gateway.kernel.security.security_context import SecurityContext

__all__ = [
    "DEFAULT_SENSITIVE_FIELDS",
    "Principal",
    "Role",
    "SecurityContext",
]
