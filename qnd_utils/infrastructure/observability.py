"""Structured Logging: JSON formatter and setup for qnd-utils log output.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (storage_key, status_code, error_code, ...) surfaced when present
    - JSON format by default, human-readable "text" format on request
"""

import json
import logging
from datetime import datetime, timezone

from qnd_utils.config import Settings, get_settings

_EXTRA_FIELDS = (
    "storage_key", "status_code", "error_code", "operation", "filename", "path",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Attach a stream handler to the root logger. Returns the handler."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler


def setup_logging_from_settings(settings: Settings | None = None) -> logging.Handler:
    settings = settings or get_settings()
    return setup_logging(settings.log_level, settings.log_format)
