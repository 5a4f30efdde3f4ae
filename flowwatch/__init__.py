"""
FlowWatch - Standard telemetry and logging setup

Two process-wide entry points:
1. setup_otel_helper()/shutdown() - OpenTelemetry connection to the trace collector
2. get_log_helper() - Structured logger that copies warnings and errors to spans
"""

__version__ = "0.1.0"

from .levels import Level
from .otel_helper import OtelHelper, setup_otel_helper, shutdown
from .logging_helper import LogHelper, get_log_helper, set_log_level

__all__ = [
    "__version__",
    "Level",
    "LogHelper",
    "OtelHelper",
    "get_log_helper",
    "set_log_level",
    "setup_otel_helper",
    "shutdown",
]
