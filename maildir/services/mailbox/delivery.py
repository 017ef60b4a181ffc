"""Staged message delivery: write into tmp, publish into new."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO, Optional

import structlog

if TYPE_CHECKING:
    from .mailbox_dir import MailboxDir

logger = structlog.get_logger(__name__)


class DeliverySession:
    """
    One in-progress message write.

    The message is staged in ``tmp/<key>`` (opened with ``O_EXCL`` so an
    existing file is never overwritten) and only becomes visible when
    :meth:`close` renames it into ``new/<key>``. A session is single-use:
    the file handle is released exactly once, whichever way the session ends.

    Usage::

        with mailbox.new_delivery() as delivery:
            delivery.write(data)
        key = delivery.key
    """

    def __init__(self, mailbox: MailboxDir):
        """
        Stage a new file in the mailbox's tmp directory.

        Args:
            mailbox: Target mailbox

        Raises:
            FileExistsError: If the generated key already exists in tmp
            OSError: If tmp cannot be written
        """
        self.mailbox = mailbox
        self.key = mailbox.key_generator.generate()
        self.tmp_path: Path = mailbox.tmp_path / self.key
        self.new_path: Path = mailbox.new_path / self.key
        self._fsync = mailbox.config.delivery.fsync

        fd = os.open(
            self.tmp_path,
            os.O_WRONLY | os.O_CREAT | os.O_EXCL,
            mailbox.config.delivery.file_mode,
        )
        self._file: Optional[BinaryIO] = os.fdopen(fd, "wb")
        self._finished = False
        logger.debug("message_staged", key=self.key, mailbox=str(mailbox.path))

    @property
    def closed(self) -> bool:
        return self._finished

    def write(self, data: bytes) -> int:
        """
        Append bytes to the staged file.

        Raises:
            ValueError: If the session was already committed or aborted
            OSError: On write failure; the file stays unpublished in tmp
        """
        if self._file is None:
            raise ValueError("delivery session is closed")
        return self._file.write(data)

    def close(self) -> str:
        """
        Commit the message: flush, close, and rename tmp/<key> to new/<key>.

        Returns:
            The delivered key

        Raises:
            ValueError: If the session was already committed or aborted
            OSError: If flushing or the rename fails; the message then stays
                stranded in tmp and is never partially visible in new
        """
        if self._finished:
            raise ValueError("delivery session is closed")
        self._finished = True

        self._release(sync=True)
        os.rename(self.tmp_path, self.new_path)
        logger.info("message_delivered", key=self.key, mailbox=str(self.mailbox.path))
        return self.key

    def abort(self) -> None:
        """Release the handle and remove the staged file without publishing it."""
        if self._finished:
            return
        self._finished = True

        try:
            self._release(sync=False)
        finally:
            try:
                os.unlink(self.tmp_path)
            except FileNotFoundError:
                pass
        logger.info("delivery_aborted", key=self.key, mailbox=str(self.mailbox.path))

    def _release(self, sync: bool) -> None:
        file, self._file = self._file, None
        if file is None:
            return
        try:
            if sync:
                file.flush()
                if self._fsync:
                    os.fsync(file.fileno())
        finally:
            file.close()

    def __enter__(self) -> DeliverySession:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._finished:
            return
        if exc_type is None:
            self.close()
        else:
            self.abort()

