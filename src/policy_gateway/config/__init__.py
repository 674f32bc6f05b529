"""Config – 12-factor settings and loaders."""

from policy_gateway.config.settings import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    GatewaySettings,
    Settings,
    SettingsFactory,
    SettingsLoader,
    load_settings,
)
from policy_gateway.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "GatewaySettings",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
    "load_settings",
]
