"""Centralized configuration path management for the debug console.

This module provides a single source of truth for all configuration and log
file paths, following XDG Base Directory specification.
"""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

# Environment variable that overrides the base directory
HOME_ENV_VAR = "DEBUG_CONSOLE_HOME"


class ConfigPaths:
    """Centralized configuration path management.

    All configuration and log files are stored in ~/.config/debug-console/
    unless the DEBUG_CONSOLE_HOME environment variable points elsewhere.
    """

    # XDG-compliant base directory
    BASE_DIR = Path.home() / ".config" / "debug-console"

    @classmethod
    def get_base_dir(cls) -> Path:
        """Get base configuration directory, creating if needed.

        Returns:
            Path to ~/.config/debug-console/ or the DEBUG_CONSOLE_HOME override
        """
        override = os.environ.get(HOME_ENV_VAR)
        base_dir = Path(override).expanduser() if override else cls.BASE_DIR
        base_dir.mkdir(parents=True, exist_ok=True)
        return base_dir

    @classmethod
    def get_config_file(cls) -> Path:
        """Get path to main configuration file.

        Returns:
            Path to config.json
        """
        return cls.get_base_dir() / "config.json"

    @classmethod
    def get_log_file(cls) -> Path:
        """Get path to the debug log file.

        Returns:
            Path to debug-console.log
        """
        return cls.get_base_dir() / "debug-console.log"
