"""Shared logging utilities for docpub.

Every docpub logger writes to stderr with UTC timestamps and does not
propagate to the root logger, so embedding applications keep control of
their own logging tree.

Usage example:
    from docpub.observability.logging import get_logger, set_log_level

    logger = get_logger("docpub.infrastructure.dispatch")
    logger.warning("Retrying %s in %s ms", operation, delay_ms)
    set_log_level("ERROR")
"""

from __future__ import annotations

import logging
import time

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
_DEFAULT_LEVEL = logging.INFO

_level: int = _DEFAULT_LEVEL
_configured: set[str] = set()


class UnknownLogLevelError(ValueError):
    """Raised when a log level name is not one of the standard levels."""

    def __init__(self, level: str) -> None:
        super().__init__(f"Unknown log level: {level!r}")


def get_logger(name: str) -> logging.Logger:
    """Return a docpub logger with UTC timestamps.

    Args:
        name: Logger name (use a stable module-qualified name).

    Returns:
        A logger with a single stream handler at the current docpub level.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(fmt=_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT)
        formatter.converter = time.gmtime
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(_level)
        logger.propagate = False
        _configured.add(name)
    return logger


def set_log_level(level: int | str) -> int:
    """Apply `level` to every docpub logger, including ones created later.

    Returns the numeric level that was applied.
    """
    global _level
    if isinstance(level, str):
        resolved = logging.getLevelNamesMapping().get(level.upper())
        if resolved is None:
            raise UnknownLogLevelError(level)
        level = resolved
    _level = level
    for name in _configured:
        logging.getLogger(name).setLevel(level)
    return level
