"""
OpenTelemetry connection management.

This module provides:
- OtelHelper, the connection manager owning the shutdown registry
- setup_otel_helper/shutdown for the process-wide instance
- ShutdownRegistry for ordered, best-effort teardown
"""

from flowwatch.otel_helper.helper import (
    OtelHelper,
    get_otel_helper,
    setup_otel_helper,
    shutdown,
)
from flowwatch.otel_helper.registry import ShutdownRegistry
from flowwatch.otel_helper.trace_provider import (
    TraceConnection,
    init_trace_provider,
    make_shutdown_callback,
)

__all__ = [
    "OtelHelper",
    "ShutdownRegistry",
    "TraceConnection",
    "get_otel_helper",
    "init_trace_provider",
    "make_shutdown_callback",
    "setup_otel_helper",
    "shutdown",
]
