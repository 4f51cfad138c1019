"""Config settings – 12-factor env-based configuration."""
from admin_access.config.settings.access import AccessSettings
from admin_access.config.settings.base import Settings
from admin_access.config.settings.factory import SettingsFactory
from admin_access.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = [
    "AccessSettings",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
