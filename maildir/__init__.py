"""Maildir mailbox delivery and lifecycle."""

from .config import AppConfig, ConfigLoader
from .models import Flag, Flags
from .services import (
    DeliverySession,
    EmailParseError,
    InvalidMailboxError,
    KeyGenerator,
    MailboxDir,
    MaildirError,
    MaildirKeyError,
    MessageReader,
    TransitionError,
)
from .utils import setup_logging

__version__ = "0.1.0"

__all__ = [
    "AppConfig",
    "ConfigLoader",
    "Flag",
    "Flags",
    "DeliverySession",
    "EmailParseError",
    "InvalidMailboxError",
    "KeyGenerator",
    "MailboxDir",
    "MaildirError",
    "MaildirKeyError",
    "MessageReader",
    "TransitionError",
    "setup_logging",
]
