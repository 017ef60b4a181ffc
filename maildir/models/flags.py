"""Maildir message flag model."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Union

INFO_PREFIX = "2,"


class Flag(Enum):
    """Standard Maildir flags, in the order they are written to filenames."""

    DRAFT = "D"
    FLAGGED = "F"
    PASSED = "P"
    REPLIED = "R"
    SEEN = "S"
    TRASHED = "T"


FlagLike = Union[Flag, str]


def _flag_char(flag: FlagLike) -> str:
    char = flag.value if isinstance(flag, Flag) else flag
    if not isinstance(char, str) or len(char) != 1:
        raise ValueError(f"Flag must be a single character: {flag!r}")
    if not char.isprintable() or char.isspace() or char in ",/:":
        raise ValueError(f"Invalid flag character: {char!r}")
    return char


@dataclass(frozen=True)
class Flags:
    """
    Immutable ordered set of single-character Maildir flags.

    Flags are kept sorted by character code, which is the order Maildir
    requires in the ``2,<flags>`` info suffix.

    Attributes:
        chars: Sorted, de-duplicated flag characters
    """

    chars: str = ""

    def __post_init__(self):
        """Normalize to sorted unique characters."""
        normalized = "".join(sorted({_flag_char(c) for c in self.chars}))
        object.__setattr__(self, "chars", normalized)

    @classmethod
    def of(cls, *flags: FlagLike) -> "Flags":
        return cls("".join(_flag_char(f) for f in flags))

    @classmethod
    def parse(cls, info: str) -> "Flags":
        """
        Decode the info part of a filename.

        Args:
            info: Text after the separator, e.g. ``"2,FS"``

        Returns:
            Flags instance; empty for an empty or non ``2,`` info

        Raises:
            ValueError: If the flag part contains invalid characters
        """
        if not info.startswith(INFO_PREFIX):
            return cls()
        return cls(info[len(INFO_PREFIX):])

    def encode(self) -> str:
        """Return the ``2,<flags>`` info string."""
        return INFO_PREFIX + self.chars

    def add(self, *flags: FlagLike) -> "Flags":
        return Flags(self.chars + "".join(_flag_char(f) for f in flags))

    def remove(self, *flags: FlagLike) -> "Flags":
        dropped = {_flag_char(f) for f in flags}
        return Flags("".join(c for c in self.chars if c not in dropped))

    def __contains__(self, flag: object) -> bool:
        if not isinstance(flag, (Flag, str)):
            return False
        char = flag.value if isinstance(flag, Flag) else flag
        return len(char) == 1 and char in self.chars

    def __iter__(self) -> Iterator[str]:
        return iter(self.chars)

    def __len__(self) -> int:
        return len(self.chars)

    def __str__(self) -> str:
        return self.chars


def flags_from(values: Iterable[FlagLike]) -> Flags:
    """Build Flags from any iterable of Flag members or characters."""
    return Flags.of(*values)
