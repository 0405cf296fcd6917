"""Config – MetricsSettings, its loaders, and settings errors."""

from mp_metrics.config.errors import ConfigError, InvalidSettingValueError
from mp_metrics.config.factory import SettingsFactory
from mp_metrics.config.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader
from mp_metrics.config.metrics import MetricsSettings

__all__ = [
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MetricsSettings",
    "SettingsFactory",
    "SettingsLoader",
]
