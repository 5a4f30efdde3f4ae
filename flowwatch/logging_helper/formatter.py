"""
JSON log formatting.

Every log line is a single JSON object with an RFC3339 timestamp, the
canonical level name, the message and the structured fields of the entry.
"""

import json
import logging
from datetime import datetime
from typing import Any, Dict

from flowwatch.levels import Level

# Keys written by the formatter itself; entry fields with these names are
# kept under "fields.<key>"
RESERVED_KEYS = frozenset({"time", "level", "msg", "logger"})
CLASH_PREFIX = "fields."


def format_rfc3339(dt: datetime) -> str:
    """
    Format a datetime as RFC3339 with second precision.

    Naive datetimes are taken to be in local time.
    """
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt.isoformat(timespec="seconds")


def level_name(levelno: int, fallback: str) -> str:
    """Canonical level name for a logging level number."""
    try:
        return str(Level.from_logging_level(levelno))
    except ValueError:
        return fallback


class JSONFormatter(logging.Formatter):
    """
    Log formatter that outputs logs in JSON format.

    Each log entry contains:
    - time: RFC3339 timestamp of the entry
    - level: Canonical level name (Debug, Info, Warn, Error, Fatal)
    - msg: The log message
    - logger: Name of the logger that produced the entry

    Records emitted by LogHelper carry their fields (including ``file`` and
    ``line`` when the call site was resolved) in ``extra_data`` and their
    creation time in ``entry_time``. A field named like one of the keys
    above is written as ``fields.<key>``. Records from plain module loggers
    get the module, function and line of the logging call instead.
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format a log record as a JSON string.

        Args:
            record: The log record to format

        Returns:
            JSON-formatted string containing the log entry
        """
        entry_time = getattr(record, "entry_time", None)
        if entry_time is None:
            entry_time = datetime.fromtimestamp(record.created).astimezone()

        log_data: Dict[str, Any] = {
            "time": format_rfc3339(entry_time),
            "level": level_name(record.levelno, record.levelname),
            "msg": record.getMessage(),
            "logger": record.name,
        }

        extra_data = getattr(record, "extra_data", None)
        if extra_data is not None:
            for key, value in extra_data.items():
                if key in RESERVED_KEYS:
                    key = CLASH_PREFIX + key
                log_data[key] = value
        else:
            if record.module:
                log_data["module"] = record.module
            if record.funcName and record.funcName != "<module>":
                log_data["function"] = record.funcName
            if record.lineno:
                log_data["line"] = record.lineno

        # Include exception information if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)
