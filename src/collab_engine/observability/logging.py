"""Shared logging utilities for the engine.

Usage example:
    from collab_engine.observability.logging import get_logger

    logger = get_logger("collab_engine.recommendations")
    logger.info("Ranked %s candidates for viewer %s", len(ranked), viewer_id)
"""

from __future__ import annotations

import logging
import time

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
_ROOT_NAMESPACE = "collab_engine"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class UnknownLogLevelError(ValueError):
    """Raised when a log level name is not supported."""

    def __init__(self, level: str) -> None:
        choices = ", ".join(sorted(_LEVELS))
        super().__init__(f"Unknown log level '{level}'. Expected one of: {choices}.")


def get_logger(name: str) -> logging.Logger:
    """Return a logger configured for UTC timestamps.

    Args:
        name: Logger name (use a stable module-qualified name).

    Returns:
        A logger with a single stream handler and a consistent UTC format.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(fmt=_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT)
        formatter.converter = time.gmtime
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False
    return logger


def set_log_level(level: str) -> int:
    """Apply a named level to every engine logger created so far.

    Returns the numeric level that was applied.
    """
    numeric = _LEVELS.get(level.strip().lower())
    if numeric is None:
        raise UnknownLogLevelError(level)
    manager = logging.Logger.manager
    for name, logger in list(manager.loggerDict.items()):
        if not isinstance(logger, logging.Logger):
            continue
        if name == _ROOT_NAMESPACE or name.startswith(f"{_ROOT_NAMESPACE}."):
            logger.setLevel(numeric)
    return numeric
