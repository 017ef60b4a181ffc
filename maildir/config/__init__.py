"""Configuration management"""

from .config_loader import ConfigError, ConfigLoader, default_config
from .maildir_config import AppConfig, DeliveryConfig, LoggingConfig, MailboxConfig, ParserConfig

__all__ = [
    "ConfigError",
    "ConfigLoader",
    "default_config",
    "AppConfig",
    "DeliveryConfig",
    "LoggingConfig",
    "MailboxConfig",
    "ParserConfig",
]
