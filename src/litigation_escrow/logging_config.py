"""Structured logging configuration using structlog.

Provides JSON-structured logging in production and human-readable colored
output in development. Campaign operations log dotted event names; wrapping a
run in ``campaign_context`` binds the campaign id (and any scenario labels)
through structlog contextvars, so every line of one case can be traced across
rounds without passing the id to each call.

Usage:
    from litigation_escrow.logging_config import campaign_context, get_logger, setup_logging
    setup_logging(log_level="DEBUG", json_logs=False)
    logger = get_logger()
    with campaign_context("case-001"):
        logger.info("campaign.locked", dao_fee=12)
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog


def setup_logging(log_level: str = "DEBUG", json_logs: bool = False) -> None:
    """Configure structlog with shared processors.

    Args:
        log_level: Standard Python log level string (DEBUG, INFO, WARNING, etc.)
        json_logs: If True, output JSON (for production). If False, colored console.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_logs:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.DEBUG))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Optional logger name. If None, uses the calling module's name.

    Returns:
        A bound structlog logger with context variable support.
    """
    return structlog.get_logger(name)


@contextmanager
def campaign_context(campaign_id: str, **values: Any) -> Iterator[None]:
    """Bind ``campaign_id`` (and any extra keys) to every log line in the block.

    Context variables are restored on exit, so nested campaigns do not leak
    into each other's logs.

    Usage:
        with campaign_context("case-001", scenario="simple-win"):
            campaign.evaluate()
    """
    with structlog.contextvars.bound_contextvars(campaign_id=campaign_id, **values):
        yield
