"""Tests for structured logging setup."""

import io
import json
import logging

import pytest
import structlog

from maildir.config import AppConfig
from maildir.config.maildir_config import LoggingConfig
from maildir.services.mailbox import MailboxDir
from maildir.utils import logging as maildir_logging
from maildir.utils.logging import LOGGER_NAME, setup_logging


@pytest.fixture
def restore_logging():
    """Restore the library and root loggers and structlog state after a test."""
    root = logging.getLogger()
    library = logging.getLogger(LOGGER_NAME)
    root_handlers, root_level = root.handlers[:], root.level
    handlers, level, propagate = library.handlers[:], library.level, library.propagate
    yield library
    root.handlers[:] = root_handlers
    root.setLevel(root_level)
    library.handlers[:] = handlers
    library.setLevel(level)
    library.propagate = propagate
    structlog.reset_defaults()


class TestSetupLogging:
    """Test logging configuration."""

    def test_configures_library_logger_only(self, restore_logging):
        """Test the root logger's handlers are left to the embedding process."""
        root = logging.getLogger()
        root_handlers = root.handlers[:]

        library = setup_logging(LoggingConfig(level="debug"), stream=io.StringIO())

        assert library is restore_logging
        assert root.handlers == root_handlers
        assert len(library.handlers) == 1
        assert isinstance(library.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)
        assert library.level == logging.DEBUG
        assert library.propagate is False

    def test_repeated_setup_keeps_single_handler(self, restore_logging):
        """Test calling setup twice replaces the handler."""
        setup_logging(LoggingConfig(), stream=io.StringIO())
        setup_logging(LoggingConfig(), stream=io.StringIO())
        assert len(restore_logging.handlers) == 1

    def test_mailbox_events_rendered_as_json(self, restore_logging, tmp_path):
        """Test events from mailbox operations reach the configured stream."""
        stream = io.StringIO()
        setup_logging(LoggingConfig(json_output=True), stream=stream)
        mbox = MailboxDir(tmp_path / "Maildir", config=AppConfig())
        mbox.create()

        key = mbox.deliver(b"hello")

        events = [json.loads(line) for line in stream.getvalue().splitlines()]
        delivered = [e for e in events if e["event"] == "message_delivered"]
        assert len(delivered) == 1
        assert delivered[0]["key"] == key
        assert delivered[0]["level"] == "info"
        assert delivered[0]["logger"].startswith(LOGGER_NAME + ".")

    def test_level_filters_events(self, restore_logging, tmp_path):
        """Test events below the configured level are dropped."""
        stream = io.StringIO()
        setup_logging(LoggingConfig(level="WARNING", json_output=True), stream=stream)
        mbox = MailboxDir(tmp_path / "Maildir", config=AppConfig())
        mbox.create()

        mbox.deliver(b"quiet")

        assert stream.getvalue() == ""

    def test_defaults_to_loaded_config(self, restore_logging, monkeypatch):
        """Test the logging section of the default configuration is applied."""
        config = AppConfig(logging={"level": "error"})
        monkeypatch.setattr(maildir_logging, "default_config", lambda: config)

        setup_logging(stream=io.StringIO())

        assert restore_logging.level == logging.ERROR
