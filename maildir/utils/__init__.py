"""Utility functions"""

from .logging import setup_logging
from .path_utils import escape_hostname, extract_key, is_hidden, join_filename, split_filename

__all__ = [
    "setup_logging",
    "escape_hostname",
    "extract_key",
    "is_hidden",
    "join_filename",
    "split_filename",
]
