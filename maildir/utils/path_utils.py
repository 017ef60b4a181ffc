"""Maildir filename parsing and hostname escaping utilities."""

from typing import Tuple

DEFAULT_SEPARATOR = ":"


def is_hidden(name: str) -> bool:
    """Return True for dot-prefixed entries, which Maildir readers ignore."""
    return name.startswith(".")


def split_filename(name: str, separator: str = DEFAULT_SEPARATOR) -> Tuple[str, str]:
    """
    Split a Maildir filename into its key and info parts.

    Args:
        name: Basename of a message file
        separator: Character separating key from info

    Returns:
        Tuple of (key, info); info is empty when the separator is absent

    Examples:
        >>> split_filename("1700000000.M1P2Q3.host:2,S")
        ('1700000000.M1P2Q3.host', '2,S')
        >>> split_filename("1700000000.M1P2Q3.host")
        ('1700000000.M1P2Q3.host', '')
    """
    key, _, info = name.partition(separator)
    return key, info


def extract_key(name: str, separator: str = DEFAULT_SEPARATOR) -> str:
    """Return the key portion of a Maildir filename."""
    return split_filename(name, separator)[0]


def join_filename(key: str, info: str, separator: str = DEFAULT_SEPARATOR) -> str:
    """Build ``<key><separator><info>``."""
    return f"{key}{separator}{info}"


def escape_hostname(hostname: str, separator: str = DEFAULT_SEPARATOR) -> str:
    """
    Escape characters that cannot appear in a Maildir key.

    ``/`` and ``:`` are replaced by their octal escapes (``\\057`` and
    ``\\072``), and so is the separator when it is something other than ``:``.

    Examples:
        >>> escape_hostname("mail/host:1")
        'mail\\\\057host\\\\0721'
    """
    reserved = {"/", ":", separator}
    return "".join(f"\\{ord(c):03o}" if c in reserved else c for c in hostname)
