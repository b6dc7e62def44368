"""Structured JSON logging for configuration events.

Logs go to stdout as JSON lines, with optional file output via the
AUDIT_LOG_FILE env var. Secrets are masked by the callers before they
reach a log record.
"""

import json
import logging
import sys
from datetime import datetime, timezone

from bulkdata_config.config.settings import Settings, get_settings

LOGGER_NAME = "bulkdata.audit"


class JSONFormatter(logging.Formatter):
    """Formats log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_entry["error"] = self.formatException(record.exc_info)
        # Merge any extra fields passed via `extra={}` kwarg
        if hasattr(record, "audit_data"):
            log_entry.update(record.audit_data)
        log_entry.setdefault("event", "log")
        return json.dumps(log_entry, default=str)


def setup_logging(settings: Settings | None = None) -> None:
    """Configure the audit logger with JSON output."""
    settings = settings or get_settings()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    logger.handlers.clear()

    formatter = JSONFormatter()

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(formatter)
    logger.addHandler(stdout_handler)

    if settings.audit_log_file:
        file_handler = logging.FileHandler(settings.audit_log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Prevent propagation to root logger (avoids duplicate output)
    logger.propagate = False


def get_audit_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)
