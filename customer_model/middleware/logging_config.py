"""
Structured logging configuration.

One stderr handler on the root logger:
    production           → JSONFormatter, one object per line
    development/testing  → ReadableFormatter, coloured single line

LOG_LEVEL overrides the level (INFO in production, DEBUG otherwise).
Context arrives through ``extra=``: request fields from middleware/timing.py
and entity keys from the services.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone

REQUEST_FIELDS = ("method", "path", "status", "duration_ms", "remote_addr", "request_id")
ENTITY_FIELDS = ("profile_key", "scenario_key", "product_key")
CONTEXT_FIELDS = REQUEST_FIELDS + ENTITY_FIELDS

NOISY_LOGGERS = ("urllib3", "werkzeug", "sqlalchemy.engine", "google")


def record_context(record: logging.LogRecord, names=CONTEXT_FIELDS) -> dict:
    """The ``extra=`` values present on a record, in field order."""
    return {
        name: getattr(record, name)
        for name in names
        if getattr(record, name, None) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per record for the log aggregator."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            **record_context(record),
        }
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class ReadableFormatter(logging.Formatter):
    """``HH:MM:SS LEVEL logger: message (entity keys) [duration]`` for a terminal."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self):
        super().__init__(datefmt="%H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, "")
        line = (
            f"{color}{self.formatTime(record, self.datefmt)} {record.levelname:<8}{self.RESET} "
            f"{record.name}: {record.getMessage()}"
        )

        keys = record_context(record, ENTITY_FIELDS)
        if keys:
            line += " (" + " ".join(f"{k}={v}" for k, v in keys.items()) + ")"
        duration = getattr(record, "duration_ms", None)
        if duration is not None:
            line += f" [{duration:.0f}ms]"

        if record.exc_info and record.exc_info[0] is not None:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure_logging(app):
    """Install the root handler for ``app``'s environment.

    Safe to call once per create_app(): existing root handlers are replaced.
    """
    testing = app.config.get("TESTING", False)
    production = not app.config.get("DEBUG", False) and not testing

    level_name = os.getenv("LOG_LEVEL", "INFO" if production else "DEBUG").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter() if production else ReadableFormatter())

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    app.logger.setLevel(level)

    if not testing:
        app.logger.info("Logging configured: level=%s format=%s",
                        level_name, "json" if production else "readable")
