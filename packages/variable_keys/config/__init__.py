"""Configuration API for variable keys."""

from .loader import load_settings
from .models import (
    DEFAULT_CONFIG_PATH,
    LoggingSettings,
    MappingEnvSettingsSource,
    ModelKeySettings,
    VariableKeysSettings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "LoggingSettings",
    "MappingEnvSettingsSource",
    "ModelKeySettings",
    "VariableKeysSettings",
    "load_settings",
]
