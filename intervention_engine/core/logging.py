"""Structured logging configuration for the Intervention Engine."""

import logging
import sys
from typing import Any


# Attributes every LogRecord carries; anything else came in through ``extra=``
RESERVED_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "extra_data"}


class StructuredFormatter(logging.Formatter):
    """
    key=value structured log formatter.

    Context passed as ``extra={...}`` or through ``log_with_context`` is
    appended after the fixed fields.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured output."""
        log_data = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "module": record.module,
            "function": record.funcName,
            "message": record.getMessage(),
        }

        for key, value in vars(record).items():
            if key not in RESERVED_ATTRS:
                log_data[key] = value

        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        parts = [f"{k}={v}" for k, v in log_data.items()]
        return " ".join(parts)


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)

        try:
            from intervention_engine.core.config import get_settings

            settings = get_settings()
            if settings.ENGINE_ENV == "dev":
                logger.setLevel(logging.DEBUG)
            else:
                logger.setLevel(logging.INFO)
        except Exception:
            # Settings unavailable (missing env vars); stay at INFO
            logger.setLevel(logging.INFO)

    return logger


def log_with_context(logger: logging.Logger, level: int, msg: str, **kwargs: Any) -> None:
    """
    Log with additional context fields.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        msg: Log message
        **kwargs: Additional context fields (e.g., request_id)
    """
    extra: dict[str, Any] = {"extra_data": kwargs}
    if "request_id" in kwargs:
        extra["request_id"] = kwargs.pop("request_id")
        extra["extra_data"] = kwargs

    logger.log(level, msg, extra=extra)
