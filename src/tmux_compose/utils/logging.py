"""
Logging and error handling framework for tmux-compose.

This module provides:
- Structured logging configuration
- Custom exception classes
- Context-aware logging utilities
- Performance logging for reconciliation runs
"""

import functools
import json
import logging
import sys
import time
import traceback
from collections.abc import Callable
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any


class LogLevel(str, Enum):
    """Log level enumeration for type safety."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogContext(str, Enum):
    """Log context categories for structured logging."""

    ENGINE = "engine"
    CONFIG = "config"
    TMUX = "tmux"
    CLI = "cli"


class TmuxComposeException(Exception):
    """Base exception class for all tmux-compose errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.timestamp = datetime.now(timezone.utc)


class ConfigurationError(TmuxComposeException):
    """Errors related to the compose file and application settings."""

    pass


class TmuxError(TmuxComposeException):
    """Errors related to tmux operations."""

    def __init__(
        self,
        message: str,
        session_name: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context)
        self.session_name = session_name


class StructuredFormatter(logging.Formatter):
    """Custom formatter for structured JSON logging."""

    _standard_fields = {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "getMessage",
        "message",
        "asctime",
        "context",
    }

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if hasattr(record, "context"):
            log_data["context"] = record.context

        # Extra fields passed through ContextualLogger
        for key, value in record.__dict__.items():
            if key not in self._standard_fields and not key.startswith("_"):
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(log_data, default=str)


class ContextualLogger:
    """Logger with context management for structured logging."""

    def __init__(self, name: str, context: LogContext):
        self.logger = logging.getLogger(name)
        self.context = context.value

    def _log(
        self, level: int, message: str, extra_context: dict[str, Any] | None = None
    ) -> None:
        """Internal logging method with context injection."""
        extra: dict[str, Any] = {
            "context": self.context,
        }

        if extra_context:
            extra.update(extra_context)

        self.logger.log(level, message, extra=extra)

    def debug(self, message: str, **kwargs) -> None:
        """Log debug message with context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs) -> None:
        """Log info message with context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs) -> None:
        """Log warning message with context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs) -> None:
        """Log error message with context."""
        self._log(logging.ERROR, message, kwargs)


def get_logger(name: str, context: LogContext) -> ContextualLogger:
    """Get a contextual logger instance."""
    return ContextualLogger(name, context)


def setup_logging(
    log_level: str | LogLevel = LogLevel.WARNING,
    log_file: Path | None = None,
    enable_structured: bool = False,
    enable_console: bool = True,
) -> None:
    """
    Setup logging configuration.

    Console output goes to stderr so that command output on stdout stays
    machine-readable.

    Args:
        log_level: Minimum log level to capture
        log_file: Optional file path for log output
        enable_structured: Use JSON structured logging format
        enable_console: Enable console output
    """
    if isinstance(log_level, LogLevel):
        log_level = log_level.value

    level = getattr(logging, log_level.upper(), None)
    if not isinstance(level, int):
        raise ConfigurationError(f"Invalid log level: {log_level}")

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

    if enable_structured:
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    handlers: list[logging.Handler] = []

    if enable_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    root_logger = logging.getLogger()

    # Clear existing handlers first
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.setLevel(level)
    for handler in handlers:
        root_logger.addHandler(handler)

    # libtmux logs every tmux invocation at debug level
    logging.getLogger("libtmux").setLevel(max(level, logging.INFO))


def log_performance(log_context: LogContext = LogContext.ENGINE):
    """Decorator to log function performance metrics."""

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger(func.__module__, log_context)

            start_time = time.monotonic()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.warning(
                    f"Performance: {func.__name__} failed",
                    function=func.__name__,
                    execution_time=time.monotonic() - start_time,
                    status="error",
                    error=str(e),
                )
                raise

            logger.info(
                f"Performance: {func.__name__} completed",
                function=func.__name__,
                execution_time=time.monotonic() - start_time,
                status="success",
            )
            return result

        return wrapper

    return decorator
