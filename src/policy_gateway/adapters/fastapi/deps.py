"""FastAPI adapter – dependency functions."""
from __future__ import annotations

from policy_gateway.kernel.security import Principal, SecurityContext


async def current_principal() -> Principal:
    """``Depends(current_principal)``: the verified principal, or a 401 ``missing_identity``."""
    return SecurityContext.require()


__all__ = ["current_principal"]
