"""Abstract interface for message reading implementations."""

from abc import ABC, abstractmethod
from email.message import Message
from typing import BinaryIO


class EmailParseError(Exception):
    """Base exception for email parsing errors."""

    pass


class MessageDefectError(EmailParseError):
    """Raised in strict mode when the parser recorded defects."""

    def __init__(self, defects: list):
        super().__init__(f"message has {len(defects)} defect(s): " + ", ".join(type(d).__name__ for d in defects))
        self.defects = defects


class EmailReader(ABC):
    """
    Abstract interface for turning a message file into parsed email objects.

    Mailbox code hands an open binary stream positioned at the start of the
    file; the reader never sees paths or keys.
    """

    @abstractmethod
    def read_header(self, fp: BinaryIO) -> Message:
        """
        Parse only the header block of a message.

        Args:
            fp: Binary stream positioned at the start of the message

        Returns:
            email.message.Message with headers and an empty payload

        Raises:
            EmailParseError: If the header block cannot be parsed

        Notes:
            - Repeated fields are preserved; use ``get_all()`` to read them
        """
        pass

    @abstractmethod
    def read_message(self, fp: BinaryIO) -> Message:
        """
        Parse a complete message.

        Args:
            fp: Binary stream positioned at the start of the message

        Returns:
            email.message.Message with headers and body

        Raises:
            EmailParseError: If the message cannot be parsed
        """
        pass
