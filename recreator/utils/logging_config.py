"""Structured logging configuration."""

import json
import logging
import sys
from typing import Any

from recreator.utils.config import get_settings


class JsonFormatter(logging.Formatter):
    """JSON formatter for machine-readable logs."""

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as a single JSON line.

        Args:
            record: Log record to format

        Returns:
            JSON string with log data
        """
        settings = get_settings()

        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "app_name": settings.APP_NAME,
            "environment": settings.ENVIRONMENT,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Structured context passed via extra={"extra_fields": {...}}
        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        # Workflow messages are often Chinese; keep them readable
        return json.dumps(log_data, ensure_ascii=False, default=str)


class StandardFormatter(logging.Formatter):
    """Plain text formatter for terminal use."""

    def __init__(self) -> None:
        fmt = "[%(asctime)s] %(levelname)s - %(name)s - %(message)s"
        datefmt = "%Y-%m-%d %H:%M:%S"
        super().__init__(fmt=fmt, datefmt=datefmt)


_logging_configured = False


def setup_logging(use_json: bool = False, force_reconfigure: bool = False) -> None:
    """
    Configure application logging.

    Installs a single stderr handler at the LOG_LEVEL from settings. stdout is
    left to command output.
    Calling it again is a no-op unless force_reconfigure is set.

    Args:
        use_json: If True, use JSON format. If False, use standard text format.
        force_reconfigure: If True, force reconfiguration even if already set up.
    """
    global _logging_configured

    if _logging_configured and not force_reconfigure:
        return

    settings = get_settings()
    root_logger = logging.getLogger()

    # Only drop our own stderr handler; pytest's caplog handler must survive
    handlers_to_remove = [
        h for h in root_logger.handlers
        if isinstance(h, logging.StreamHandler) and h.stream == sys.stderr
    ]
    for handler in handlers_to_remove:
        root_logger.removeHandler(handler)

    log_level = getattr(logging, settings.LOG_LEVEL)
    root_logger.setLevel(log_level)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(JsonFormatter() if use_json else StandardFormatter())
    root_logger.addHandler(console_handler)

    # LiteLLM is chatty at INFO; keep it at WARNING unless we are debugging
    if log_level > logging.DEBUG:
        logging.getLogger("LiteLLM").setLevel(logging.WARNING)

    _logging_configured = True

    logging.getLogger(__name__).debug(
        f"Logging configured: level={settings.LOG_LEVEL}, "
        f"format={'json' if use_json else 'standard'}"
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the given name.

    Ensures logging is set up before returning the logger.

    Args:
        name: Name for the logger (typically __name__ from calling module)

    Returns:
        Logger instance
    """
    if not _logging_configured:
        setup_logging()

    return logging.getLogger(name)


def reset_logging() -> None:
    """Clear handlers and mark logging as unconfigured. Used by tests."""
    global _logging_configured

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(logging.WARNING)

    _logging_configured = False
