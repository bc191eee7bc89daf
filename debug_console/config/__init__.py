"""Configuration utilities for the debug console."""

from .settings_manager import (
    ConsoleSettings,
    get_setting,
    set_settings,
    get_theme_setting,
    load_config_data,
    load_console_settings,
    validate_theme,
    DEFAULT_THEME,
    VALID_THEMES,
)

__all__ = [
    "ConsoleSettings",
    "get_setting",
    "set_settings",
    "get_theme_setting",
    "load_config_data",
    "load_console_settings",
    "validate_theme",
    "DEFAULT_THEME",
    "VALID_THEMES",
]
