"""
Exception classes for FlowWatch.

This module provides the FlowWatchError class and factory functions that
wrap an underlying cause with an error code and a contextual message, so
the original exception stays reachable through ``__cause__``.
"""

from typing import Any, List, Optional

from flowwatch.errors.codes import ErrorCode


class FlowWatchError(Exception):
    """
    Base exception class for all FlowWatch errors.

    This exception provides structured error information including:
    - error_code: A standardized error code from the ErrorCode enum
    - message: The context added at the boundary the error crossed
    - cause: The wrapped exception, also stored as ``__cause__``
    - details: Optional additional context

    Example:
        try:
            exporter = OTLPSpanExporter(endpoint=url, insecure=True)
        except Exception as e:
            raise exporter_setup_failed(e) from e
    """

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        cause: Optional[BaseException] = None,
        details: Optional[dict[str, Any]] = None
    ):
        """
        Initialize a FlowWatchError.

        Args:
            error_code: The error code from the ErrorCode enum
            message: A human-readable error message
            cause: The exception being wrapped, if any
            details: Optional dictionary with additional error context
        """
        self.error_code = error_code
        self.message = message
        self.cause = cause
        self.details = details
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message}: {self.cause}"

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the exception to a dictionary for structured logging.

        Returns:
            Dictionary containing error_code, message, cause and details
        """
        result: dict[str, Any] = {
            "error_code": self.error_code.value,
            "message": self.message,
        }
        if self.cause is not None:
            result["cause"] = str(self.cause)
        if self.details is not None:
            result["details"] = self.details
        return result

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(error_code={self.error_code.value!r}, "
            f"message={self.message!r}, cause={self.cause!r}, "
            f"details={self.details!r})"
        )


class ShutdownError(FlowWatchError):
    """
    Several shutdown steps failed.

    The first failure is kept as the cause; all of them are available in
    ``errors`` and appear in the string form.
    """

    def __init__(self, message: str, errors: List[BaseException]):
        self.errors = list(errors)
        super().__init__(
            error_code=ErrorCode.SHUTDOWN_FAILED,
            message=message,
            cause=self.errors[0] if self.errors else None,
            details={"errors": [str(e) for e in self.errors]},
        )

    def __str__(self) -> str:
        return f"{self.message}: " + "; ".join(str(e) for e in self.errors)


# Factory functions for the wrapping points of the package

def exporter_setup_failed(cause: BaseException) -> FlowWatchError:
    """Wrap a failure to construct the OTLP exporter."""
    return FlowWatchError(
        error_code=ErrorCode.EXPORTER_SETUP_FAILED,
        message="Failed to create OTLP exporter",
        cause=cause
    )


def provider_shutdown_failed(cause: BaseException) -> FlowWatchError:
    """Wrap a failure to shut down the tracer provider."""
    return FlowWatchError(
        error_code=ErrorCode.PROVIDER_SHUTDOWN_FAILED,
        message="Failed to shut down the tracer provider",
        cause=cause
    )


def exporter_shutdown_failed(cause: BaseException) -> FlowWatchError:
    """Wrap a failure to shut down the span exporter."""
    return FlowWatchError(
        error_code=ErrorCode.EXPORTER_SHUTDOWN_FAILED,
        message="Failed to shut down the span exporter",
        cause=cause
    )


def shutdown_failed(errors: List[BaseException]) -> ShutdownError:
    """Combine several shutdown failures into one error."""
    return ShutdownError(
        message="Failed to shut down the telemetry connection",
        errors=errors
    )
