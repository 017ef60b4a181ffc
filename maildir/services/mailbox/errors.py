"""Exceptions raised by mailbox operations.

Filesystem failures are not wrapped: they propagate as the builtin
``OSError`` family so callers can inspect ``errno`` directly.
"""

from typing import List, Optional, Tuple


class MaildirError(Exception):
    """Base exception for maildir errors."""

    pass


class MaildirKeyError(MaildirError, KeyError):
    """
    Raised when a key matches more or less than one message.

    Attributes:
        key: The offending key
        n: Number of matching files (0 means not found, >1 means ambiguous)
    """

    def __init__(self, key: str, n: int):
        super().__init__(key, n)
        self.key = key
        self.n = n

    def __str__(self) -> str:
        return f"maildir: key {self.key} matches {self.n} files."


class TransitionError(MaildirError, OSError):
    """
    Raised when some entries of a new -> cur scan could not be renamed.

    The scan is not transactional: every entry listed in ``keys`` was moved
    to ``cur`` before the error was raised.

    Attributes:
        keys: Keys that were successfully moved
        failures: (entry name, error) pairs for entries left in ``new``
    """

    def __init__(self, keys: List[str], failures: List[Tuple[str, OSError]]):
        first = failures[0][1] if failures else None
        super().__init__(
            getattr(first, "errno", None),
            f"{len(failures)} of {len(keys) + len(failures)} entries could not be moved to cur",
        )
        self.keys = keys
        self.failures = failures

    def __str__(self) -> str:
        return f"maildir: {self.strerror}"

    @property
    def first_error(self) -> Optional[OSError]:
        return self.failures[0][1] if self.failures else None


class InvalidMailboxError(MaildirError):
    """Raised when a directory does not have the tmp/new/cur layout."""

    pass