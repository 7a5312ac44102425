"""Logging utilities for the MIME type registry.

This module provides standardized logging functionality for registry operations.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, Optional

# Type for log callback functions
LogCallback = Callable[[int, str, Dict[str, Any]], None]

PACKAGE_LOGGER_NAME = "mime_type_registry"

logging.getLogger(PACKAGE_LOGGER_NAME).addHandler(logging.NullHandler())

_callback: Optional[LogCallback] = None


class LogLevel(int, Enum):
    """Log levels for the registry."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


class LogEvent(str, Enum):
    """Event types for registry logging."""

    REGISTRY = "registry"
    LOADER = "loader"
    V1_PARSE = "v1_parse"
    CONTAINER = "container"
    CACHE = "cache"


def get_logger(name: str) -> logging.Logger:
    """Get a logger below the package logger.

    Args:
        name: Logger name, either a module ``__name__`` or a short suffix

    Returns:
        The logger instance
    """
    if name == PACKAGE_LOGGER_NAME or name.startswith(PACKAGE_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER_NAME}.{name}")


_logger = get_logger("events")


def set_log_callback(callback: Optional[LogCallback]) -> None:
    """Install (or remove, with ``None``) a process-wide log callback.

    The callback receives every registry log record in addition to the
    standard logging output.
    """
    global _callback
    _callback = callback


def _format(event: LogEvent, message: str, data: Dict[str, Any]) -> str:
    if not data:
        return f"[{event.value}] {message}"
    details = ", ".join(f"{key}={value}" for key, value in data.items())
    return f"[{event.value}] {message} ({details})"


def _log(level: LogLevel, event: LogEvent, message: str, data: Dict[str, Any]) -> None:
    """Log an event to the package logger and the optional callback.

    Args:
        level: Severity level
        event: Event type
        message: Human readable message
        data: Dictionary of event data
    """
    _logger.log(int(level), _format(event, message, data))

    if _callback is None:
        return
    try:
        _callback(int(level), message, {"event": event.value, **data})
    except Exception as e:
        # Fallback to standard logging if callback fails
        logging.error(
            f"Logging callback failed with error: {e}. Original log: "
            f"level={level}, event={event}, data={data}"
        )


def log_debug(event: LogEvent, message: str, **data: Any) -> None:
    """Log a debug message."""
    _log(LogLevel.DEBUG, event, message, data)


def log_info(event: LogEvent, message: str, **data: Any) -> None:
    """Log an info message."""
    _log(LogLevel.INFO, event, message, data)


def log_warning(event: LogEvent, message: str, **data: Any) -> None:
    """Log a warning message."""
    _log(LogLevel.WARNING, event, message, data)


def log_error(event: LogEvent, message: str, **data: Any) -> None:
    """Log an error message."""
    _log(LogLevel.ERROR, event, message, data)
