"""
Logging setup.

Gate log lines go to stderr so that tool output on stdout passes through
untouched.
"""

from __future__ import annotations

import logging
import os
import sys

import structlog

LOG_LEVEL_ENV_VAR = "PUSHGATE_LOG_LEVEL"


def resolve_level(verbose: bool = False) -> int:
    """DEBUG with --verbose, else PUSHGATE_LOG_LEVEL, else INFO."""
    if verbose:
        return logging.DEBUG
    name = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(verbose: bool = False) -> None:
    """Configure structlog for console output on stderr."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(resolve_level(verbose)),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
