"""Kernel security – Principal, Role."""
from __future__ import annotations

import dataclasses
from typing import Any


@dataclasses.dataclass(frozen=True)
class Role:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclasses.dataclass(frozen=True)
class Principal:
    """Verified identity produced by the identity collaborator.

    ``subject`` is what the policy engine receives as ``input.user``. Raw
    token ``claims`` are kept for routes but ignored for equality.
    """
    subject: str
    roles: frozenset[Role] = frozenset()
    claims: dict[str, Any] = dataclasses.field(default_factory=dict, compare=False, repr=False)

    @property
    def role_names(self) -> frozenset[str]:
        return frozenset(r.name for r in self.roles)

    def has_role(self, role: str | Role) -> bool:
        return str(role) in self.role_names

    def __str__(self) -> str:
        return self.subject


__all__ = ["Principal", "Role"]
