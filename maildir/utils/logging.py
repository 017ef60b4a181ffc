"""Structured logging setup using structlog."""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional

import structlog

from maildir.config import LoggingConfig, default_config

LOGGER_NAME = "maildir"


def setup_logging(config: Optional[LoggingConfig] = None, *, stream: Optional[IO[str]] = None) -> logging.Logger:
    """Route the library's events through structlog.

    Only the ``maildir`` logger is touched: it gets a single handler and
    stops propagating, so handlers the embedding process installed on the
    root logger keep working unchanged.

    Parameters
    ----------
    config:
        Logging section to apply. Defaults to the ``logging`` section of
        the configuration loaded from the default paths.
    stream:
        Destination of rendered events (default: ``sys.stderr``).

    Returns
    -------
    The configured ``maildir`` stdlib logger.
    """
    if config is None:
        config = default_config().logging

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    if config.json_output:
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    library_logger = logging.getLogger(LOGGER_NAME)
    library_logger.handlers[:] = [handler]
    library_logger.setLevel(config.level)
    library_logger.propagate = False
    return library_logger
