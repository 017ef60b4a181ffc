"""Maildir mailbox access and delivery."""

from .delivery import DeliverySession
from .errors import InvalidMailboxError, MaildirError, MaildirKeyError, TransitionError
from .key_generator import KeyGenerator
from .mailbox_dir import MailboxDir

__all__ = [
    "DeliverySession",
    "InvalidMailboxError",
    "MaildirError",
    "MaildirKeyError",
    "TransitionError",
    "KeyGenerator",
    "MailboxDir",
]
