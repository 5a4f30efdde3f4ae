"""
Logging module with OpenTelemetry trace bridging.

This module provides:
- LogHelper, a structured JSON logger taking a trace context per call
- Hooks that add call sites and copy Warn-and-above entries to spans
- JSONFormatter for machine-parseable output with RFC3339 timestamps
"""

from flowwatch.levels import Level
from flowwatch.logging_helper.caller import CALLER_SKIP_FRAMES, caller_location
from flowwatch.logging_helper.formatter import JSONFormatter, format_rfc3339
from flowwatch.logging_helper.helper import (
    LogHelper,
    default_hooks,
    get_log_helper,
    reset_log_helper,
    set_log_level,
)
from flowwatch.logging_helper.hooks import (
    ContextHook,
    LogEntry,
    LogHook,
    OtelHook,
    OtelShutdownHook,
    event_attributes,
)

__all__ = [
    "CALLER_SKIP_FRAMES",
    "ContextHook",
    "JSONFormatter",
    "Level",
    "LogEntry",
    "LogHelper",
    "LogHook",
    "OtelHook",
    "OtelShutdownHook",
    "caller_location",
    "default_hooks",
    "event_attributes",
    "format_rfc3339",
    "get_log_helper",
    "reset_log_helper",
    "set_log_level",
]
