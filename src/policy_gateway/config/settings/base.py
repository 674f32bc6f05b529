"""Config settings – Settings base class."""
from __future__ import annotations

import dataclasses
from typing import Any


@dataclasses.dataclass
class Settings:
    """Base class for environment-driven settings dataclasses.

    Subclasses set ``_prefix``; field ``timeout_ms`` of a class with prefix
    ``OPA`` is read from ``OPA_TIMEOUT_MS``. ``_validate`` runs after every
    construction, whichever loader built the instance.
    """

    _prefix: dataclasses.ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to reject values that parse but make no sense."""

    @classmethod
    def env_key(cls, field_name: str) -> str:
        return f"{cls._prefix}_{field_name}".upper().lstrip("_")

    def as_dict(self) -> dict[str, Any]:
        """Effective values keyed by environment variable, for startup logs."""
        return {self.env_key(f.name): getattr(self, f.name) for f in dataclasses.fields(self)}


__all__ = ["Settings"]
