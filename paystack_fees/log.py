"""
Paystack Fees — Logging Setup

The package only logs through structlog module loggers and never configures
logging on import. Applications call configure_logging() once at startup.
"""

from __future__ import annotations

import logging
import sys

import structlog

from paystack_fees.config import settings


def configure_logging(log_level: str | None = None) -> None:
    """
    Set up structured logging with JSON output.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
            Defaults to settings.LOG_LEVEL.
    """
    level = getattr(logging, (log_level or settings.LOG_LEVEL).upper())

    # Configure stdlib logging first (for third-party libraries)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )
