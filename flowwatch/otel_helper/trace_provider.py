"""
Tracer provider construction.

Builds the OTLP/gRPC span exporter and the SDK tracer provider, installs
the provider globally and registers the callback that flushes and closes
both at shutdown.
"""

import logging
import sys
from dataclasses import dataclass
from typing import Callable, Optional

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, SpanExporter

from flowwatch.errors import (
    ErrorCode,
    exporter_setup_failed,
    exporter_shutdown_failed,
    provider_shutdown_failed,
    shutdown_failed,
)
from flowwatch.otel_helper.registry import ShutdownRegistry

logger = logging.getLogger(__name__)


@dataclass
class TraceConnection:
    """Handle on the exporter and provider created by setup."""

    provider: TracerProvider
    exporter: SpanExporter
    service_name: str
    collector_url: str


def make_shutdown_callback(
    provider: TracerProvider,
    exporter: SpanExporter
) -> Callable[[], None]:
    """
    Build the callback that shuts down the provider, then the exporter.

    Both steps always run. If both fail, the callback raises a single
    ShutdownError holding the two wrapped errors; if one fails, it raises
    that wrapped error alone.
    """
    def shutdown() -> None:
        provider_error: Optional[Exception] = None
        exporter_error: Optional[Exception] = None

        # Flushes any spans still buffered in the batch processor
        try:
            provider.shutdown()
        except Exception as e:
            provider_error = provider_shutdown_failed(e)

        try:
            exporter.shutdown()
        except Exception as e:
            exporter_error = exporter_shutdown_failed(e)

        if provider_error is not None and exporter_error is not None:
            raise shutdown_failed([provider_error, exporter_error])
        if provider_error is not None:
            raise provider_error
        if exporter_error is not None:
            raise exporter_error

    return shutdown


def init_trace_provider(
    service_name: str,
    collector_url: str,
    support_tls: bool,
    registry: ShutdownRegistry
) -> TraceConnection:
    """
    Connect to the trace collector and install the global tracer provider.

    Args:
        service_name: Value of the ``service.name`` resource attribute
        collector_url: host:port of the OTLP/gRPC collector
        support_tls: Must be False; TLS is not implemented
        registry: Registry receiving the shutdown callback

    Returns:
        TraceConnection: The exporter and provider that were installed

    Raises:
        FlowWatchError: If the exporter cannot be constructed
    """
    if support_tls:
        # TODO: pass grpc.ssl_channel_credentials() to the exporter
        logger.critical(
            "TLS is not implemented yet",
            extra={"extra_data": {"error_code": ErrorCode.TLS_NOT_IMPLEMENTED.value}}
        )
        sys.exit(1)

    try:
        exporter = OTLPSpanExporter(endpoint=collector_url, insecure=True)
    except Exception as e:
        raise exporter_setup_failed(e) from e
    logger.info("Insecure connection to the collector at %s", collector_url)

    resource = Resource.create({SERVICE_NAME: service_name})
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(BatchSpanProcessor(exporter))

    # Set as global tracer provider
    trace.set_tracer_provider(provider)

    registry.register(make_shutdown_callback(provider, exporter))

    return TraceConnection(
        provider=provider,
        exporter=exporter,
        service_name=service_name,
        collector_url=collector_url,
    )
