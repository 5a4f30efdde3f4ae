"""
Error handling module for FlowWatch.

This module provides:
- ErrorCode enum for standardized error codes
- FlowWatchError class wrapping a cause with context
- ShutdownError combining several teardown failures
"""

from flowwatch.errors.codes import ErrorCode
from flowwatch.errors.exceptions import (
    FlowWatchError,
    ShutdownError,
    exporter_setup_failed,
    exporter_shutdown_failed,
    provider_shutdown_failed,
    shutdown_failed,
)

__all__ = [
    "ErrorCode",
    "FlowWatchError",
    "ShutdownError",
    "exporter_setup_failed",
    "exporter_shutdown_failed",
    "provider_shutdown_failed",
    "shutdown_failed",
]
