"""
Structured JSON logging configuration.

Replaces the default text formatter so every log line is one JSON object:
timestamp, level, logger, message, plus the access fields (user, role,
space_id, path) when a caller attaches them via `extra=`.
"""

import json
import logging
from datetime import datetime, timezone

from dailyos.config import settings

ACCESS_FIELDS = ("user", "role", "space_id", "path")


class JSONFormatter(logging.Formatter):
    """Emit each log record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for name in ACCESS_FIELDS:
            if hasattr(record, name):
                log_entry[name] = getattr(record, name)

        # Include exception info
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def configure_json_logging(log_level: str | None = None):
    """Replace the root logger's formatter with JSON output. Defaults to settings.log_level."""
    log_level = log_level or settings.log_level
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))
