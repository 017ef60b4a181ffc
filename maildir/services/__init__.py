"""Mailbox services"""

from .email_parser import EmailParseError, EmailReader, MessageReader
from .mailbox import (
    DeliverySession,
    InvalidMailboxError,
    KeyGenerator,
    MailboxDir,
    MaildirError,
    MaildirKeyError,
    TransitionError,
)

__all__ = [
    "EmailParseError",
    "EmailReader",
    "MessageReader",
    "DeliverySession",
    "InvalidMailboxError",
    "KeyGenerator",
    "MailboxDir",
    "MaildirError",
    "MaildirKeyError",
    "TransitionError",
]
