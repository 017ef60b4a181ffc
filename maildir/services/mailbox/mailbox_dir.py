"""Maildir mailbox directory access.

Every state change made here is a single ``rename`` or ``unlink``, so the
module takes no locks: concurrent readers always find a message in exactly
one of ``new`` or ``cur``. This relies on POSIX rename being atomic within a
volume; ``tmp``, ``new`` and ``cur`` share one parent directory, and moves
between mailboxes on different volumes fail with ``EXDEV`` instead of being
emulated by a copy.
"""

import os
import time
from email.message import Message
from pathlib import Path
from typing import Iterable, List, Optional, Union

import structlog

from maildir.config import AppConfig, MailboxConfig, default_config
from maildir.models.flags import INFO_PREFIX, Flag, FlagLike, Flags, flags_from
from maildir.services.email_parser import EmailReader, MessageReader
from maildir.utils.path_utils import extract_key, is_hidden, join_filename, split_filename
from .delivery import DeliverySession
from .errors import InvalidMailboxError, MaildirKeyError, TransitionError
from .key_generator import KeyGenerator

logger = structlog.get_logger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


class MailboxDir:
    """
    A single Maildir mailbox identified by its root directory.

    The separator between key and info is fixed per instance, so mailboxes
    written with different separators can be used side by side.
    """

    SUBDIRS = ("tmp", "new", "cur")

    def __init__(
        self,
        path: PathLike,
        separator: Optional[str] = None,
        config: Optional[AppConfig] = None,
        reader: Optional[EmailReader] = None,
    ):
        """
        Initialize mailbox access. Nothing is created on disk.

        Args:
            path: Mailbox root directory
            separator: Key/info separator (default: configured, normally ":")
            config: Application config (default: loaded from default paths)
            reader: Message parser for header()/message()

        Raises:
            ValueError: If the separator is not a single allowed character
        """
        self.config = config if config is not None else default_config()
        if separator is None:
            separator = self.config.mailbox.separator
        else:
            separator = MailboxConfig(separator=separator).separator

        self._path = Path(path)
        self._separator = separator
        self.key_generator = KeyGenerator(separator)
        self.reader = reader if reader is not None else MessageReader(strict=self.config.parser.strict)

    def __repr__(self) -> str:
        return f"MailboxDir({str(self._path)!r}, separator={self._separator!r})"

    @property
    def path(self) -> Path:
        return self._path

    @property
    def separator(self) -> str:
        return self._separator

    @property
    def tmp_path(self) -> Path:
        return self._path / "tmp"

    @property
    def new_path(self) -> Path:
        return self._path / "new"

    @property
    def cur_path(self) -> Path:
        return self._path / "cur"

    # Layout

    def create(self) -> None:
        """
        Create the root and its tmp, new and cur subdirectories if missing.

        Raises:
            OSError: If a directory cannot be created, or a non-directory
                is in the way
        """
        mode = self.config.mailbox.dir_mode
        os.makedirs(self._path, mode=mode, exist_ok=True)
        for subdir in self.SUBDIRS:
            (self._path / subdir).mkdir(mode=mode, exist_ok=True)
        logger.debug("mailbox_created", mailbox=str(self._path))

    def exists(self) -> bool:
        """Return True if the root and all three subdirectories are directories."""
        return self._path.is_dir() and all((self._path / s).is_dir() for s in self.SUBDIRS)

    def check(self) -> None:
        """
        Verify the Maildir layout.

        Raises:
            InvalidMailboxError: If the root or a subdirectory is missing or
                is not a directory
        """
        if not self._path.is_dir():
            raise InvalidMailboxError(f"{self._path} is not a directory")
        for subdir in self.SUBDIRS:
            full_subdir = self._path / subdir
            if not full_subdir.is_dir():
                raise InvalidMailboxError(f"error checking subdirectory {full_subdir}: must be a directory")

    # Delivery

    def new_delivery(self) -> DeliverySession:
        """Stage a new message in tmp and return its delivery session."""
        return DeliverySession(self)

    def deliver(self, data: bytes) -> str:
        """
        Deliver a complete message into new.

        Returns:
            Key of the delivered message
        """
        with self.new_delivery() as delivery:
            delivery.write(data)
        return delivery.key

    # Reading and transitions

    def _names(self, subdir: str) -> List[str]:
        return [n for n in os.listdir(self._path / subdir) if not is_hidden(n)]

    def unseen(self) -> List[str]:
        """
        Move every message from new to cur, marking it seen.

        Entries are processed in directory enumeration order, which is not
        necessarily delivery order. An entry that disappears before it can be
        renamed was claimed by a concurrent scanner and is skipped.

        Returns:
            Keys of the messages moved by this call

        Raises:
            OSError: If new cannot be listed
            TransitionError: If some entries could not be renamed; every
                other entry has still been moved
        """
        keys: List[str] = []
        failures = []

        for name in self._names("new"):
            key, info = split_filename(name, self._separator)
            try:
                flags = Flags.parse(info)
                dropped = bool(info) and not info.startswith(INFO_PREFIX)
            except ValueError:
                flags = Flags()
                dropped = True
            if dropped:
                logger.debug("unseen_info_dropped", key=key, info=info)
            dest = self.cur_path / join_filename(key, flags.add(Flag.SEEN).encode(), self._separator)
            src = self.new_path / name

            try:
                os.rename(src, dest)
            except FileNotFoundError as e:
                if os.path.lexists(src):
                    # cur itself is missing
                    logger.warning("unseen_rename_failed", key=key, error=str(e))
                    failures.append((name, e))
                else:
                    logger.debug("unseen_race_lost", key=key)
                continue
            except OSError as e:
                logger.warning("unseen_rename_failed", key=key, error=str(e))
                failures.append((name, e))
                continue

            logger.debug("message_seen", key=key, mailbox=str(self._path))
            keys.append(key)

        if failures:
            raise TransitionError(keys, failures) from failures[0][1]
        return keys

    def keys(self) -> List[str]:
        """
        Return the keys of all messages in cur.

        Raises:
            OSError: If cur cannot be read
        """
        return [extract_key(n, self._separator) for n in self._names("cur")]

    def filename(self, key: str) -> Path:
        """
        Return the path of the cur file holding ``key``.

        Raises:
            MaildirKeyError: If the key matches no file (n == 0) or more than
                one file (n > 1)
            OSError: If cur cannot be read
        """
        prefix = key + self._separator
        matches = [n for n in self._names("cur") if n == key or n.startswith(prefix)]
        if len(matches) != 1:
            raise MaildirKeyError(key, len(matches))
        return self.cur_path / matches[0]

    def header(self, key: str) -> Message:
        """Return the parsed header block of a message."""
        with open(self.filename(key), "rb") as fp:
            return self.reader.read_header(fp)

    def message(self, key: str) -> Message:
        """Return the fully parsed message."""
        with open(self.filename(key), "rb") as fp:
            return self.reader.read_message(fp)

    def move(self, dest: "MailboxDir", key: str) -> Path:
        """
        Move a message from this mailbox's cur into ``dest``'s cur.

        The flags are kept; only the separator is rewritten when the two
        mailboxes use different ones.

        Returns:
            New path of the message
        """
        src = self.filename(key)
        name = src.name
        if dest.separator != self._separator:
            key_part, info = split_filename(name, self._separator)
            name = join_filename(key_part, info, dest.separator) if info else key_part
        target = dest.cur_path / name

        os.rename(src, target)
        logger.info("message_moved", key=key, source=str(self._path), dest=str(dest.path))
        return target

    def purge(self, key: str) -> None:
        """
        Delete a message from cur.

        Raises:
            MaildirKeyError: If the key does not resolve to exactly one file
            OSError: If the file cannot be removed
        """
        path = self.filename(key)
        os.unlink(path)
        logger.info("message_purged", key=key, mailbox=str(self._path))

    # Flags

    def flags(self, key: str) -> Flags:
        """Return the flags of a message in cur."""
        return Flags.parse(split_filename(self.filename(key).name, self._separator)[1])

    def set_flags(self, key: str, flags: Union[Flags, Iterable[FlagLike]]) -> Path:
        """
        Replace the flags of a message with a single rename inside cur.

        Returns:
            New path of the message
        """
        if not isinstance(flags, Flags):
            flags = flags_from(flags)
        src = self.filename(key)
        target = self.cur_path / join_filename(key, flags.encode(), self._separator)
        if target == src:
            return src

        os.rename(src, target)
        logger.debug("flags_changed", key=key, flags=str(flags))
        return target

    def add_flags(self, key: str, *flags: FlagLike) -> Path:
        return self.set_flags(key, self.flags(key).add(*flags))

    def remove_flags(self, key: str, *flags: FlagLike) -> Path:
        return self.set_flags(key, self.flags(key).remove(*flags))

    # Maintenance

    def clean(self, max_age: Optional[float] = None) -> List[str]:
        """
        Remove stale files left in tmp by interrupted deliveries.

        Args:
            max_age: Age in seconds after which a tmp file is stale
                (default: ``mailbox.tmp_max_age_seconds``, 36 hours)

        Returns:
            Names of the removed files
        """
        if max_age is None:
            max_age = self.config.mailbox.tmp_max_age_seconds
        now = time.time()
        removed = []

        for name in self._names("tmp"):
            path = self.tmp_path / name
            try:
                if not path.is_file() or now - path.stat().st_mtime <= max_age:
                    continue
                path.unlink()
            except FileNotFoundError:
                continue
            removed.append(name)

        if removed:
            logger.info("tmp_cleaned", mailbox=str(self._path), count=len(removed))
        return removed
