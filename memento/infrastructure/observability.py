"""Structured Logging — JSON and key=value formatters for the life clock process.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Countdown fields (state, total_seconds_remaining, breakdown, end_of_life) are
      surfaced when a record carries them, in both output formats
    - Enums log as their value, datetimes as ISO-8601, so ticks read the same as snapshots

Design Decisions:
    - Hand-written formatters over third-party libs: zero dependencies, full control
    - setup_logging called once on startup from main
    - Per-tick countdown records are DEBUG; the default INFO level keeps them out of the stream
"""

import json
import logging
from datetime import datetime, timezone
from enum import Enum

EXTRA_FIELDS = (
    "component", "state", "total_seconds_remaining", "breakdown", "end_of_life",
    "granularity", "error_code", "callback", "hz",
)


def _jsonable(value):
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def extract_fields(record: logging.LogRecord) -> dict:
    """Known extra fields present on the record, normalized for output."""
    fields = {}
    for key in EXTRA_FIELDS:
        val = record.__dict__.get(key)
        if val is not None:
            fields[key] = _jsonable(val)
    return fields


class JSONFormatter(logging.Formatter):
    """Format logs as JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log.update(extract_fields(record))
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class KeyValueFormatter(logging.Formatter):
    """Human-readable line followed by the known extras as key=value pairs."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = extract_fields(record)
        if not fields:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in fields.items())
        if "\n" in line:
            head, _, tail = line.partition("\n")
            return f"{head} {pairs}\n{tail}"
        return f"{line} {pairs}"


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Configure root logging; returns the installed handler."""
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else KeyValueFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
