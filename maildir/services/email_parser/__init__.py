"""Email parsing services."""

from .base import EmailParseError, EmailReader, MessageDefectError
from .message_reader import MessageReader

__all__ = [
    "EmailParseError",
    "EmailReader",
    "MessageDefectError",
    "MessageReader",
]
