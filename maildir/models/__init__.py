"""Data models for Maildir messages"""

from .flags import Flag, Flags

__all__ = ["Flag", "Flags"]
