"""Kernel security – SecurityContext, the per-request verified identity."""

from __future__ import annotations

import contextlib
import contextvars
from typing import Iterator

from policy_gateway.kernel.security.principal import Principal

_PRINCIPAL: contextvars.ContextVar[Principal | None] = contextvars.ContextVar(
    "_pg_principal", default=None
)


class SecurityContext:
    """The :class:`Principal` verified for the current request task.

    Written only by the security middleware (through :meth:`bound`); read by
    the enforcement filter and by route dependencies.
    """

    @staticmethod
    def get_current() -> Principal | None:
        return _PRINCIPAL.get()

    @staticmethod
    def set_current(principal: Principal | None) -> contextvars.Token[Principal | None]:
        return _PRINCIPAL.set(principal)

    @staticmethod
    def reset(token: contextvars.Token[Principal | None]) -> None:
        _PRINCIPAL.reset(token)

    @staticmethod
    def clear() -> None:
        _PRINCIPAL.set(None)

    @staticmethod
    @contextlib.contextmanager
    def bound(principal: Principal | None) -> Iterator[Principal | None]:
        """Make *principal* current for the ``with`` block, restoring the previous one on exit."""
        token = _PRINCIPAL.set(principal)
        try:
            yield principal
        finally:
            _PRINCIPAL.reset(token)

    @staticmethod
    def require() -> Principal:
        """Return the current principal.

        Raises :class:`~policy_gateway.kernel.errors.MissingIdentityError`
        when there is none or its subject is blank.
        """
        from policy_gateway.kernel.errors import MissingIdentityError

        principal = _PRINCIPAL.get()
        if principal is None or not principal.subject.strip():
            raise MissingIdentityError()
        return principal


__all__ = ["SecurityContext"]
