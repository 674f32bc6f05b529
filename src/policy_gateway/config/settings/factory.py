"""Config settings – SettingsFactory."""
from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence, TypeVar

from policy_gateway.config.settings.base import Settings
from policy_gateway.config.settings.loaders import SettingsLoader, build

T = TypeVar("T", bound=Settings)
logger = logging.getLogger(__name__)


class SettingsFactory:
    """Layer several settings sources into one validated settings object.

    Each loader contributes only the values it actually defines, so a later
    loader overrides an earlier one field by field and never resets a value
    to its default. *overrides* are applied last. Coercion and validation
    errors from any source propagate unchanged.
    """

    @staticmethod
    def create(
        settings_cls: type[T],
        loaders: Sequence[SettingsLoader] | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> T:
        merged: dict[str, Any] = {}
        for loader in loaders or ():
            values = loader.read(settings_cls)
            logger.debug("settings.loaded loader=%s fields=%s", type(loader).__name__, sorted(values))
            merged.update(values)
        merged.update(overrides or {})
        return build(settings_cls, merged)


__all__ = ["SettingsFactory"]
