"""Config settings – EnvSettingsLoader, DotenvSettingsLoader."""
from __future__ import annotations

import abc
import dataclasses
import os
from typing import Any, Callable, TypeVar

from dotenv import load_dotenv

from policy_gateway.config.settings.base import Settings
from policy_gateway.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

T = TypeVar("T", bound=Settings)

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})


def _to_bool(raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError("expected a boolean such as true/false or 1/0")


def _to_list(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


def _to_tuple(raw: str) -> tuple[str, ...]:
    return tuple(_to_list(raw))


_COERCERS: dict[str, Callable[[str], Any]] = {
    "bool": _to_bool,
    "int": int,
    "float": float,
    "list": _to_list,
    "tuple": _to_tuple,
}


def _coercer_for(field: dataclasses.Field[Any]) -> Callable[[str], Any] | None:
    # Hints are plain strings under ``from __future__ import annotations``.
    hint = field.type if isinstance(field.type, str) else getattr(field.type, "__name__", "")
    return _COERCERS.get(hint.split("[", 1)[0].strip())


def _is_required(field: dataclasses.Field[Any]) -> bool:
    return field.default is dataclasses.MISSING and field.default_factory is dataclasses.MISSING


def build(settings_class: type[T], values: dict[str, Any]) -> T:
    """Construct *settings_class*, reporting the first required field absent from *values*."""
    for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
        if _is_required(field) and field.name not in values:
            raise MissingRequiredSettingError(settings_class.env_key(field.name))
    try:
        return settings_class(**values)
    except ConfigError:
        raise
    except TypeError as exc:
        raise ConfigError(f"Failed to construct {settings_class.__name__}: {exc}") from exc


class SettingsLoader(abc.ABC):
    """Port: read raw settings values from an external source."""

    @abc.abstractmethod
    def read(self, settings_class: type[Settings]) -> dict[str, Any]:
        """Return the coerced values this source defines, keyed by field name."""

    def load(self, settings_class: type[T]) -> T:
        return build(settings_class, self.read(settings_class))


class EnvSettingsLoader(SettingsLoader):
    """Load settings from OS environment variables.

    Field ``timeout_ms`` of a class with ``_prefix = "OPA"`` is read from
    ``OPA_TIMEOUT_MS``. Booleans accept ``1/true/yes/on`` and
    ``0/false/no/off``; lists are comma separated.
    """

    def read(self, settings_class: type[Settings]) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            env_key = settings_class.env_key(field.name)
            raw = os.environ.get(env_key)
            if raw is None:
                continue
            coerce = _coercer_for(field)
            try:
                values[field.name] = coerce(raw) if coerce else raw
            except ValueError as exc:
                raise InvalidSettingValueError(env_key, raw, str(exc)) from exc
        return values


class DotenvSettingsLoader(EnvSettingsLoader):
    """Export a ``.env`` file into the process environment, then read it like :class:`EnvSettingsLoader`.

    Variables already set in the process win unless *override* is true.
    """

    def __init__(self, env_file: str = ".env", override: bool = False) -> None:
        self._env_file = env_file
        self._override = override

    def read(self, settings_class: type[Settings]) -> dict[str, Any]:
        load_dotenv(self._env_file, override=self._override)
        return super().read(settings_class)


__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "SettingsLoader", "build"]
