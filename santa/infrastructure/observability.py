"""Structured Logging — JSON formatter and setup for production observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (event_id, storage, mode, attempts, error_code) surfaced when present
    - Pairings are never passed as extras, so a log line cannot reveal who drew whom
    - JSON format in production, human-readable in development

Design Decisions:
    - JSONFormatter over third-party libs: stdlib logging, full control of the shape
    - setup_logging called once on startup via lifespan; idempotent across reloads
"""

import json
import logging
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "event_id", "participant_count", "attempts", "storage", "mode",
    "error_code", "path", "status_code",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

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
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    handler = logging.StreamHandler()
    handler.set_name("santa")
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    for existing in list(logging.root.handlers):
        if existing.get_name() == "santa":
            logging.root.removeHandler(existing)
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
