"""
Telemetry connection manager.

OtelHelper owns the connection to the trace collector and the registry of
shutdown callbacks. A process normally uses the module-level default
instance through ``setup_otel_helper()`` and ``shutdown()``; tests and
programs that want explicit ownership can construct their own.
"""

import logging
from typing import List, Optional

from dotenv import load_dotenv
from opentelemetry.baggage.propagation import W3CBaggagePropagator
from opentelemetry.propagate import set_global_textmap
from opentelemetry.propagators.composite import CompositePropagator
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from flowwatch.config.settings import OtelSettings, load_otel_settings
from flowwatch.once import Once
from flowwatch.otel_helper.registry import ShutdownRegistry
from flowwatch.otel_helper.trace_provider import TraceConnection, init_trace_provider

logger = logging.getLogger(__name__)

ENV_FILE = ".env"


class OtelHelper:
    """
    Sets up the OpenTelemetry SDK connection once and tears it down once.

    Attributes:
        registry: Shutdown callbacks, drained by ``shutdown``
        connection: The exporter and provider, None until setup succeeded
    """

    def __init__(self, registry: Optional[ShutdownRegistry] = None):
        self.registry = registry if registry is not None else ShutdownRegistry()
        self.connection: Optional[TraceConnection] = None
        self._once = Once()

    @property
    def is_setup(self) -> bool:
        return self.connection is not None

    def setup(self, settings: Optional[OtelSettings] = None) -> None:
        """
        Initialize the trace provider and propagation, once.

        Repeated and concurrent calls are no-ops once the first call has
        finished, including when the first call failed.

        Args:
            settings: Explicit settings; read from the environment when None

        Raises:
            FlowWatchError: If the exporter cannot be constructed
        """
        self._once.do(self._init, settings)

    def _init(self, settings: Optional[OtelSettings]) -> None:
        set_global_textmap(CompositePropagator([
            TraceContextTextMapPropagator(),
            W3CBaggagePropagator(),
        ]))

        # Make sure the settings from the .env file are in the environment
        load_dotenv(ENV_FILE)

        if settings is None:
            settings = load_otel_settings()

        self.connection = init_trace_provider(
            settings.service_name,
            settings.collector_url,
            settings.support_tls,
            self.registry,
        )
        logger.info(
            "Telemetry initialized",
            extra={"extra_data": {
                "service_name": settings.service_name,
                "collector_url": settings.collector_url,
            }}
        )

    def shutdown(self) -> List[Exception]:
        """
        Run the registered shutdown callbacks in order.

        Returns:
            The errors raised by failing callbacks; they are already logged
        """
        return self.registry.drain()


# Global connection manager instance
_otel_helper = OtelHelper()


def get_otel_helper() -> OtelHelper:
    """Get the process-wide connection manager."""
    return _otel_helper


def setup_otel_helper(settings: Optional[OtelSettings] = None) -> None:
    """
    Initialize the OpenTelemetry SDK connection to the backend.

    Raises:
        FlowWatchError: If the exporter cannot be constructed
    """
    _otel_helper.setup(settings)


def shutdown() -> List[Exception]:
    """Shut down the process-wide telemetry connection."""
    return _otel_helper.shutdown()
