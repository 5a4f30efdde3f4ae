"""
Error code catalog for FlowWatch.

Every error raised by the package carries one of these codes. The code is
the stable part callers can match on; the message attached to the
exception is the context added where the error crossed a boundary.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """
    Enumeration of all error codes used by FlowWatch.

    Codes fall into two groups:
    - Setup errors: the telemetry connection could not be established
    - Teardown errors: flushing or closing the connection failed
    """

    # Setup errors
    EXPORTER_SETUP_FAILED = "EXPORTER_SETUP_FAILED"
    """The OTLP span exporter could not be constructed"""

    TLS_NOT_IMPLEMENTED = "TLS_NOT_IMPLEMENTED"
    """A TLS connection to the collector was requested"""

    # Teardown errors
    PROVIDER_SHUTDOWN_FAILED = "PROVIDER_SHUTDOWN_FAILED"
    """The tracer provider failed to flush or shut down"""

    EXPORTER_SHUTDOWN_FAILED = "EXPORTER_SHUTDOWN_FAILED"
    """The span exporter failed to shut down"""

    SHUTDOWN_FAILED = "SHUTDOWN_FAILED"
    """Several shutdown steps failed"""

