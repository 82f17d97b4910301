"""Configuration module for the Curiosity agent."""

from .defaults import get_default_config
from .logging_config import LOGGING_CONFIG
from .schema import ConfigValidationError, deep_merge, load_config_file
from .settings import Settings, configure_settings, get_settings, settings

__all__ = [
    "settings",
    "Settings",
    "LOGGING_CONFIG",
    "ConfigValidationError",
    "configure_settings",
    "deep_merge",
    "get_default_config",
    "get_settings",
    "load_config_file",
]
