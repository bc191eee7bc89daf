"""Centralized settings management for the debug console.

Settings Schema:
    {
        "theme": str,                # Theme name (e.g., "textual-dark", "nord")
        "prompt": str,               # Prompt shown while capturing (e.g., "py> ")
        "welcome": str,              # Message logged when capture starts
        "repeat_prefix": str,        # Host command reused by a bare "eval"
        "frame_rate": float,         # Watch panel refreshes per second
        "watch_offset": [int, int],  # Watch panel anchor (x, y) in cells
        "watch_line_spacing": int,   # Blank lines between watch entries
        "startup": [str, ...],       # Lines run silently before the first prompt
    }
"""

import json
import logging
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Tuple

from debug_console.core.config_paths import ConfigPaths
from debug_console.core.session import (
    DEFAULT_PROMPT,
    DEFAULT_REPEAT_PREFIX,
    DEFAULT_WELCOME,
)

LOGGER = logging.getLogger(__name__)

# Default theme if none is saved
DEFAULT_THEME = "console-dark"

# Valid theme names: the console themes plus Textual's built-in ones
VALID_THEMES = {
    "console-dark",
    "console-light",
    "textual-dark",
    "textual-light",
    "nord",
    "gruvbox",
    "dracula",
    "tokyo-night",
    "monokai",
    "solarized-light",
}

DEFAULT_STARTUP = ["import math", "import os", "import sys"]


@dataclass
class ConsoleSettings:
    """Console settings with defaults for anything missing from config.json."""

    prompt: str = DEFAULT_PROMPT
    welcome: str = DEFAULT_WELCOME
    repeat_prefix: str = DEFAULT_REPEAT_PREFIX
    frame_rate: float = 30.0
    watch_offset: Tuple[int, int] = (2, 1)
    watch_line_spacing: int = 0
    startup: List[str] = field(default_factory=lambda: list(DEFAULT_STARTUP))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConsoleSettings":
        """Build settings from config data, ignoring invalid entries.

        Args:
            data: Parsed config.json content

        Returns:
            ConsoleSettings with every invalid or missing value defaulted
        """
        settings = cls()
        known = {f.name for f in fields(cls)}
        for key, value in data.items():
            if key not in known:
                continue
            try:
                setattr(settings, key, _coerce(key, value))
            except (TypeError, ValueError) as e:
                LOGGER.warning(f"Ignoring invalid setting {key}={value!r}: {e}")
        return settings


def _coerce(key: str, value: Any) -> Any:
    """Validate and convert one raw setting value."""
    if key in ("prompt", "welcome", "repeat_prefix"):
        if not isinstance(value, str):
            raise TypeError("expected a string")
        return value
    if key == "frame_rate":
        rate = float(value)
        if rate <= 0:
            raise ValueError("must be positive")
        return rate
    if key == "watch_offset":
        x, y = value
        return (int(x), int(y))
    if key == "watch_line_spacing":
        spacing = int(value)
        if spacing < 0:
            raise ValueError("must not be negative")
        return spacing
    if key == "startup":
        if isinstance(value, str) or not all(isinstance(line, str) for line in value):
            raise TypeError("expected a list of strings")
        return list(value)
    return value


def load_config_data() -> Dict[str, Any]:
    """Loads configuration data from config.json."""
    config_file = ConfigPaths.get_config_file()
    if not config_file.exists():
        return {}
    try:
        content = config_file.read_text(encoding="utf-8")
        if not content.strip():
            return {}
        return json.loads(content)
    except (json.JSONDecodeError, IOError) as e:
        LOGGER.warning(
            f"Failed to load config file: {e}. Using empty configuration.",
            exc_info=True,
        )
        return {}


def _save_config_data(data: Dict[str, Any]) -> None:
    """Saves the configuration data to config.json."""
    config_file = ConfigPaths.get_config_file()
    try:
        config_file.parent.mkdir(parents=True, exist_ok=True)
        config_file.write_text(json.dumps(data, indent=4), encoding="utf-8")
    except IOError as e:
        LOGGER.error(f"Failed to save config file: {e}", exc_info=True)


def get_setting(key: str, default: Any = None) -> Any:
    """Retrieve a setting from the config file."""
    data = load_config_data()
    return data.get(key, default)


def set_settings(updates: Dict[str, Any]) -> None:
    """Load existing settings, apply updates, and save back."""
    data = load_config_data()
    data.update(updates)
    _save_config_data(data)


def validate_theme(theme: str) -> bool:
    """Check if a theme name is valid.

    Args:
        theme: Theme name to validate

    Returns:
        True if theme is a known theme name
    """
    return theme in VALID_THEMES


def get_theme_setting() -> str:
    """Retrieve the saved theme setting, falling back to default.

    Returns:
        A valid theme name. If the saved theme is invalid, returns DEFAULT_THEME.
    """
    theme = get_setting("theme", DEFAULT_THEME)
    return theme if validate_theme(theme) else DEFAULT_THEME


def load_console_settings() -> ConsoleSettings:
    """Load the console settings from config.json."""
    data = load_config_data()
    if not isinstance(data, dict):
        LOGGER.warning("Config file does not contain an object. Using defaults.")
        return ConsoleSettings()
    return ConsoleSettings.from_dict(data)
