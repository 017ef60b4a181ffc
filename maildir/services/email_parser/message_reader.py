"""RFC 5322 message reader backed by the standard email package."""

from email import policy
from email.message import Message
from email.parser import BytesParser
from typing import BinaryIO

from .base import EmailParseError, EmailReader, MessageDefectError


class MessageReader(EmailReader):
    """
    Parse message files with ``email.policy.default``.

    The standard parser is lenient: malformed input is recorded as defects on
    the returned message rather than raised. With ``strict=True`` any recorded
    defect is raised as :class:`MessageDefectError` instead.
    """

    def __init__(self, strict: bool = False):
        """
        Initialize reader.

        Args:
            strict: Raise on parser defects instead of returning the message
        """
        self.strict = strict
        self._parser = BytesParser(policy=policy.default)

    def read_header(self, fp: BinaryIO) -> Message:
        return self._parse(fp, headersonly=True)

    def read_message(self, fp: BinaryIO) -> Message:
        return self._parse(fp, headersonly=False)

    def _parse(self, fp: BinaryIO, headersonly: bool) -> Message:
        try:
            message = self._parser.parse(fp, headersonly=headersonly)
            defects = list(message.defects)
            if self.strict:
                for _, value in message.items():
                    defects.extend(getattr(value, "defects", ()))
        except OSError:
            raise
        except Exception as e:
            raise EmailParseError(f"Error parsing message: {e}") from e

        if self.strict and defects:
            raise MessageDefectError(defects)
        return message
