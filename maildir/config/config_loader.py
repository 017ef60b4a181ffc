"""Configuration loader for mailbox settings."""

import json
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .maildir_config import AppConfig


class ConfigError(ValueError):
    """Raised when a configuration file cannot be loaded."""

    pass


class ConfigLoader:
    """Load and validate application configuration."""

    DEFAULT_CONFIG_PATHS = [
        Path("~/.maildir/config.json"),
        Path("config/maildir.json"),
    ]

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration loader.

        Args:
            config_path: Optional custom config file path
        """
        self.config_path = config_path
        self._config: Optional[AppConfig] = None

    def load_app_config(self) -> AppConfig:
        """
        Load application configuration from file.

        Returns:
            AppConfig instance; defaults when no config file is found

        Raises:
            ConfigError: If the config file is not valid JSON or fails validation
        """
        if self._config is not None:
            return self._config

        config_paths = [self.config_path] if self.config_path else self.DEFAULT_CONFIG_PATHS

        for config_path in config_paths:
            if config_path and config_path.expanduser().exists():
                try:
                    with open(config_path.expanduser(), "r", encoding="utf-8") as f:
                        config_data = json.load(f)
                    self._config = AppConfig(**config_data)
                    return self._config
                except (json.JSONDecodeError, ValidationError, TypeError) as e:
                    raise ConfigError(f"Invalid config in {config_path}: {e}") from e

        # Return default config if no file found
        self._config = AppConfig()
        return self._config

    def reload(self) -> AppConfig:
        """Reload configuration from file."""
        self._config = None
        return self.load_app_config()


_default_loader = ConfigLoader()


def default_config() -> AppConfig:
    """Return the process-wide configuration from the default search paths."""
    return _default_loader.load_app_config()
