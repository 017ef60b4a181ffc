"""Configuration models for mailbox access."""

import logging

from pydantic import BaseModel, Field, field_validator

# Classic Maildir rule: tmp files untouched for 36 hours are stale.
DEFAULT_TMP_MAX_AGE = 36 * 60 * 60


class DeliveryConfig(BaseModel):
    """Settings for staging and publishing new messages."""

    file_mode: int = 0o600
    fsync: bool = True

    @field_validator("file_mode")
    def validate_file_mode(cls, v: int) -> int:
        if not 0 <= v <= 0o777:
            raise ValueError("file_mode must be a permission mask")
        return v


class MailboxConfig(BaseModel):
    """Mailbox directory settings."""

    separator: str = ":"
    dir_mode: int = 0o700
    tmp_max_age_seconds: int = DEFAULT_TMP_MAX_AGE

    @field_validator("separator")
    def validate_separator(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError("separator must be exactly one character")
        # Keys are built from alphanumerics, ".", and "\" escapes; hostnames add "-" and "_".
        if v.isalnum() or v.isspace() or not v.isprintable() or v in "/.\\,-_":
            raise ValueError(f"separator {v!r} is reserved")
        return v

    @field_validator("dir_mode")
    def validate_dir_mode(cls, v: int) -> int:
        if not 0 <= v <= 0o777:
            raise ValueError("dir_mode must be a permission mask")
        return v

    @field_validator("tmp_max_age_seconds")
    def validate_max_age(cls, v: int) -> int:
        if v < 1:
            raise ValueError("tmp_max_age_seconds must be positive")
        return v


class ParserConfig(BaseModel):
    """Message parsing settings."""

    strict: bool = False


class LoggingConfig(BaseModel):
    """Logging settings."""

    level: str = "INFO"
    json_output: bool = False

    @field_validator("level")
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


class AppConfig(BaseModel):
    """Main application configuration."""

    schema_version: str = "1.0"
    mailbox: MailboxConfig = Field(default_factory=MailboxConfig)
    delivery: DeliveryConfig = Field(default_factory=DeliveryConfig)
    parser: ParserConfig = Field(default_factory=ParserConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("schema_version")
    def validate_schema_version(cls, v: str) -> str:
        if not v:
            raise ValueError("schema_version is required")
        return v
