"""Config settings – 12-factor env-based configuration."""
from policy_gateway.config.settings.base import Settings
from policy_gateway.config.settings.factory import SettingsFactory
from policy_gateway.config.settings.gateway import GatewaySettings, load_settings
from policy_gateway.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = [
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "GatewaySettings",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
    "load_settings",
]
