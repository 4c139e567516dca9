"""
Structured Logging — JSON Output for Production

Configures Python logging to emit structured JSON logs.
Each log entry includes timestamp, level, logger name, and
any additional context fields passed through ``extra``.

Usage:
    from dictagger.logging import get_logger
    logger = get_logger("dictionary")
    logger.info("Dictionary loaded", extra={"path": "terms.tsv", "entries": 120})
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Optional


LOG_LEVEL = os.getenv("DICTAGGER_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.getenv("DICTAGGER_LOG_FORMAT", "json")  # "json" or "text"

# Context fields copied from the record into the JSON entry
_EXTRA_FIELDS = (
    "path", "entries", "skipped", "terms", "match_kind", "case_sensitive",
    "word_matching", "scheme", "lines", "tags", "files", "duration_ms",
    "status_code", "method", "error", "error_type",
)


class JSONFormatter(logging.Formatter):
    """Formats log records as JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in _EXTRA_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                entry[key] = val

        if record.exc_info and record.exc_info[0]:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable format for development."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def setup_logging(
    level: Optional[str] = None,
    fmt: Optional[str] = None,
    stream=None,
):
    """
    Configure the dictagger logger. Call once at CLI or API startup.

    Logs go to stderr by default so that tagged output on stdout
    stays machine-readable.
    """
    root = logging.getLogger("dictagger")
    level_name = (level or LOG_LEVEL).upper()
    root.setLevel(getattr(logging, level_name, logging.INFO))

    # Clear existing handlers
    root.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    if (fmt or LOG_FORMAT) == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter())

    root.addHandler(handler)

    # Suppress noisy third-party loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return root


def disable_logging():
    """Silence the dictagger namespace entirely (CLI --silent)."""
    root = logging.getLogger("dictagger")
    root.handlers.clear()
    root.addHandler(logging.NullHandler())
    root.setLevel(logging.CRITICAL + 1)
    return root


def get_logger(name: str) -> logging.Logger:
    """Get a named logger under the dictagger namespace."""
    return logging.getLogger(f"dictagger.{name}")
