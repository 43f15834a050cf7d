"""
Logging - Namespaced loggers for the engine.

Library modules only ask for loggers under the ``logicduel`` namespace and
never install handlers. The application entry point (the CLI, or a hosting
app with its own setup) decides where records go by calling
configure_logging.
"""

from __future__ import annotations

import logging
from typing import Optional, TextIO

PACKAGE_LOGGER = "logicduel"
LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Silences "no handler" warnings until an application configures output
logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


class _ConsoleHandler(logging.StreamHandler):
    """Stream handler installed by configure_logging, so it can be replaced."""


def parse_level(name: str) -> int:
    """Map a level name (any case) to its logging constant. Raises ValueError."""
    upper = name.strip().upper()
    if upper not in LEVEL_NAMES:
        raise ValueError(f"Unknown log level: {name}")
    return getattr(logging, upper)


def configure_logging(level: int = logging.INFO, stream: Optional[TextIO] = None) -> logging.Handler:
    """
    Send logicduel records to a formatted stream handler.

    Only the package logger is touched; the root logger and handlers
    installed by a hosting app are left alone. Calling it again replaces
    the previous console handler instead of stacking another one.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, _ConsoleHandler):
            logger.removeHandler(handler)

    handler = _ConsoleHandler(stream)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the package namespace. Installs nothing."""
    return logging.getLogger(name or PACKAGE_LOGGER)
