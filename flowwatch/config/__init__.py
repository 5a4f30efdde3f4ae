# Configuration module for FlowWatch
from .settings import (
    LoggingSettings,
    OtelSettings,
    clear_settings_cache,
    get_logging_settings,
    load_otel_settings,
    parse_bool,
)

__all__ = [
    "LoggingSettings",
    "OtelSettings",
    "clear_settings_cache",
    "get_logging_settings",
    "load_otel_settings",
    "parse_bool",
]
