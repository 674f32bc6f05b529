"""Mapping – RequestMapper."""
from __future__ import annotations

from typing import Iterable

from policy_gateway.decision.models import DecisionRequest
from policy_gateway.kernel.errors import MissingIdentityError
from policy_gateway.kernel.security import Principal
from policy_gateway.mapping.rules import DEFAULT_RULES, MappingRule

_METHOD_ACTIONS: dict[str, str] = {
    "GET": "read",
    "HEAD": "read",
    "OPTIONS": "read",
    "POST": "write",
    "PUT": "write",
    "PATCH": "write",
    "DELETE": "write",
}

UNKNOWN_ACTION = "unknown"


def action_for_method(method: str) -> str:
    """``GET``/``HEAD``/``OPTIONS`` read, mutating verbs write, anything else ``unknown``."""
    return _METHOD_ACTIONS.get(method.upper(), UNKNOWN_ACTION)


class RequestMapper:
    """Derive a :class:`DecisionRequest` from identity, method and path.

    Rules are tried in order and the first match wins, so a broad pattern
    listed before a narrow one shadows it. Paths matched by no rule use the
    raw path as the resource.
    """

    def __init__(self, rules: Iterable[MappingRule] = DEFAULT_RULES) -> None:
        self._rules: tuple[MappingRule, ...] = tuple(rules)

    @property
    def rules(self) -> tuple[MappingRule, ...]:
        return self._rules

    def map(self, identity: Principal | None, method: str, path: str) -> DecisionRequest:
        """Build the decision tuple for one request.

        Raises :class:`MissingIdentityError` when *identity* is ``None`` or has
        a blank subject, and :class:`InvalidInputError` when the derived
        resource is blank.
        """
        if identity is None or not identity.subject or not identity.subject.strip():
            raise MissingIdentityError()

        action: str | None = None
        resource = path
        for rule in self._rules:
            captures = rule.match(path)
            if captures is None:
                continue
            resource = rule.resource_for(path, captures)
            action = rule.action_for(method)
            break

        return DecisionRequest.create(identity.subject, action or action_for_method(method), resource)


__all__ = ["RequestMapper", "UNKNOWN_ACTION", "action_for_method"]
