"""
Structured JSON logging configuration.
Every record is emitted as one JSON object on stdout, tagged with the request id.
"""
import logging
import json
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from lepinet.core.config import settings

# Attributes every LogRecord carries; anything else came in through extra={}
_RESERVED_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "thread",
        "threadName",
        "taskName",
        "exc_info",
        "exc_text",
        "stack_info",
        "request_id",
    }
)


class JSONFormatter(logging.Formatter):
    """Render a log record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = getattr(record, "request_id", None)
        if request_id is None:
            # Imported lazily: middleware imports this module
            from lepinet.core.middleware import request_id_var

            request_id = request_id_var.get()
        if request_id is not None:
            log_data["request_id"] = request_id

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data["source"] = {
            "file": record.pathname,
            "line": record.lineno,
            "function": record.funcName,
        }

        return json.dumps(log_data, default=str)


def setup_logging() -> logging.Logger:
    """
    Configure and return the application logger.
    Idempotent: re-running replaces the handler instead of stacking another.
    """
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logger = logging.getLogger("lepinet")
    logger.setLevel(level)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(JSONFormatter())
    logger.addHandler(console_handler)

    logger.propagate = False

    return logger


# Global logger instance
logger = setup_logging()


def log_error(message: str, error: Exception = None, **kwargs):
    """Log an error with optional exception details."""
    extra = kwargs.copy()
    if error:
        extra["error_type"] = type(error).__name__
        extra["error_message"] = str(error)

    logger.error(message, extra=extra, exc_info=error is not None)


def log_info(message: str, **kwargs):
    """Log an info message with extra fields."""
    logger.info(message, extra=kwargs)


def log_warning(message: str, **kwargs):
    """Log a warning message with extra fields."""
    logger.warning(message, extra=kwargs)


def log_debug(message: str, **kwargs):
    """Log a debug message with extra fields."""
    logger.debug(message, extra=kwargs)
