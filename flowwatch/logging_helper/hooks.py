"""
Log entry hooks.

A hook sees every entry logged at one of its levels before the entry is
written. LogHelper runs its hooks in registration order:

- ContextHook adds the file and line of the logging call
- OtelHook records the entry as a "log" event on the active span
- OtelShutdownHook shuts the telemetry connection down on fatal entries
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, FrozenSet, Optional

from opentelemetry import trace
from opentelemetry.context import Context

from flowwatch.levels import Level
from flowwatch.logging_helper.caller import CALLER_SKIP_FRAMES, caller_location
from flowwatch.logging_helper.formatter import format_rfc3339

logger = logging.getLogger(__name__)

LOG_EVENT_NAME = "log"
UNKNOWN_VALUE = "unknown"


@dataclass
class LogEntry:
    """
    A single logging call, alive only while hooks run and it is written.

    Attributes:
        level: Severity of the entry
        message: The formatted message
        data: Structured fields; hooks may add to it
        context: Context carrying the active span, None for the current one
        time: When the entry was created
    """

    level: Level
    message: str
    data: Dict[str, Any] = field(default_factory=dict)
    context: Optional[Context] = None
    time: datetime = field(default_factory=lambda: datetime.now().astimezone())


class LogHook(ABC):
    """Handler invoked for every entry logged at one of its levels."""

    levels: FrozenSet[Level] = frozenset()

    @abstractmethod
    def fire(self, entry: LogEntry) -> None:
        """Process the entry. Raising reports a hook failure."""


class ContextHook(LogHook):
    """
    Adds the file and line number of the logging call to the entry.

    Stack inspection is comparatively expensive, so Info entries are
    skipped; Debug is included because it is disabled in production.
    """

    levels = frozenset({Level.DEBUG, Level.WARN, Level.ERROR, Level.FATAL})

    def __init__(self, skip: int = CALLER_SKIP_FRAMES):
        self.skip = skip

    def fire(self, entry: LogEntry) -> None:
        location = caller_location(self.skip)
        if location is None:
            logger.debug("Unable to retrieve the caller information and thus the file and line number")
            return

        entry.data["file"], entry.data["line"] = location


def _string_attribute(data: Dict[str, Any], key: str) -> str:
    """Stringify a str or int field; anything else becomes "unknown"."""
    value = data.get(key)
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return UNKNOWN_VALUE


def event_attributes(entry: LogEntry) -> Dict[str, str]:
    """Build the attributes of the span event recorded for an entry."""
    return {
        "msg": entry.message,
        "level": str(entry.level),
        "file": _string_attribute(entry.data, "file"),
        "line": _string_attribute(entry.data, "line"),
        "time": format_rfc3339(entry.time),
    }


class OtelHook(LogHook):
    """Records Warn-and-above entries as events on the active span."""

    levels = frozenset({Level.WARN, Level.ERROR, Level.FATAL})

    def fire(self, entry: LogEntry) -> None:
        span = trace.get_current_span(entry.context)
        if not span.get_span_context().is_valid:
            # TODO: export through the OTel logs SDK when no span is active
            return

        span.add_event(LOG_EVENT_NAME, attributes=event_attributes(entry))


class OtelShutdownHook(LogHook):
    """
    Shuts down the telemetry connection before a fatal entry ends the process.

    Args:
        shutdown: The connection manager's shutdown function
    """

    levels = frozenset({Level.FATAL})

    def __init__(self, shutdown: Callable[[], Any]):
        self.shutdown = shutdown

    def fire(self, entry: LogEntry) -> None:
        self.shutdown()
