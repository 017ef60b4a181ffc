"""Unique key generation for new Maildir messages.

Keys follow the layout described at http://cr.yp.to/proto/maildir.html::

    <seconds>.M<usec>P<pid>Q<count>R<random>.<hostname>

The counter is shared by every generator in the process; ``itertools.count``
is thread-safe, so no lock is taken.
"""

import itertools
import os
import socket
import time
from typing import Callable, Optional

from maildir.utils.path_utils import DEFAULT_SEPARATOR, escape_hostname

# Start at 1 rather than 0
_delivery_count = itertools.count(1)


class KeyGenerator:
    """
    Mints filesystem-safe, collision-resistant message keys.

    Two calls from the same process within one clock tick still differ
    through the delivery counter; the pid and hostname keep cooperating
    processes apart.
    """

    def __init__(
        self,
        separator: str = DEFAULT_SEPARATOR,
        hostname: Optional[str] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize key generator.

        Args:
            separator: Separator of the target mailbox; never appears in keys
            hostname: Override the host component (default: socket.gethostname())
            clock: Wall clock returning seconds as a float
        """
        self.separator = separator
        self._hostname = hostname
        self._clock = clock

    @property
    def hostname(self) -> str:
        if self._hostname is None:
            self._hostname = socket.gethostname()
        return escape_hostname(self._hostname, self.separator)

    def generate(self) -> str:
        """Return a new key."""
        now = self._clock()
        seconds = int(now)
        usecs = int((now - seconds) * 1_000_000)
        rand = int.from_bytes(os.urandom(4), "little")
        middle = f"M{usecs}P{os.getpid()}Q{next(_delivery_count)}R{rand:08x}"
        return f"{seconds}.{middle}.{self.hostname}"

    __call__ = generate
