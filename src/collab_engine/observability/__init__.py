"""Observability helpers."""

from .logging import UnknownLogLevelError, get_logger, set_log_level

__all__ = ["UnknownLogLevelError", "get_logger", "set_log_level"]
