"""
Structured JSON logging for the laundry service.

Every log line is one JSON object on stdout with a channel (http, db,
students, laundry), the current request id and any business context
(student_id, record_id) attached by the caller.
"""

import logging
import json
import uuid
from datetime import datetime, timezone
from contextvars import ContextVar

from laundry.config import LOG_LEVEL

# ──────────────────────────────────────────────────────────────
# Request id of the HTTP request being served. The middleware in
# main.py sets it, the formatter stamps it on every entry, and it
# stays empty for logs emitted outside a request (startup, scripts).
# ──────────────────────────────────────────────────────────────
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

LOGGER_PREFIX = "laundry"
CHANNELS = ("http", "db", "students", "laundry")


def channel_of(logger_name: str) -> str:
    """``laundry.students`` -> ``students``; loggers outside the tree report ``app``."""
    prefix, _, channel = logger_name.partition(".")
    return channel if prefix == LOGGER_PREFIX and channel else "app"


def _utc_timestamp() -> str:
    # ISO 8601, millisecond precision, Z suffix
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


class StructuredJsonFormatter(logging.Formatter):
    """
    Render a LogRecord as a single JSON line.

    Keys: timestamp, level, message, channel, context (request_id merged
    with the caller's business ids), extra, and exception when the record
    carries a traceback.
    """

    def format(self, record: logging.LogRecord) -> str:
        context = {"request_id": request_id_var.get("")}
        context.update(getattr(record, "context", None) or {})

        log_entry = {
            "timestamp": _utc_timestamp(),
            "level": record.levelname,
            "message": record.getMessage(),
            "channel": getattr(record, "channel", None) or channel_of(record.name),
            "context": context,
            "extra": getattr(record, "extra_data", None) or {},
        }
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        # Driver errors and dates are not JSON native
        return json.dumps(log_entry, default=str)


def setup_logging(level: str = LOG_LEVEL):
    """Send everything through one stdout JSON handler at ``level``."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredJsonFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers = [handler]

    for channel in CHANNELS:
        get_logger(channel).setLevel(numeric_level)

    return root_logger


def get_logger(channel: str) -> logging.Logger:
    return logging.getLogger(f"{LOGGER_PREFIX}.{channel}")


def log_with_context(logger: logging.Logger, level: str, message: str,
                     context: dict = None, extra_data: dict = None, exc_info=None):
    """
    Emit a structured log entry.

    Args:
        logger: One of the channel loggers from ``get_logger``
        level: Level name, any case (INFO, WARNING, ERROR, DEBUG)
        message: Human-readable log message
        context: Business identifiers (student_id, record_id)
        extra_data: Additional metadata (payload, duration_ms, searched)
        exc_info: Passed through to ``Logger.log`` for tracebacks
    """
    logger.log(
        getattr(logging, level.upper(), logging.INFO),
        message,
        exc_info=exc_info,
        extra={
            "context": context or {},
            "extra_data": extra_data or {},
            "channel": channel_of(logger.name),
        },
    )


def generate_request_id() -> str:
    return str(uuid.uuid4())
