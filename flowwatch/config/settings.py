"""
Configuration management for FlowWatch.

This module reads the telemetry and logging configuration from environment
variables using Pydantic settings. Unlike a service configuration, nothing
here is required: every missing or unparsable value is replaced by a
documented default and a warning is logged, so a misconfigured environment
never stops the process.

Environment variables:
- OTEL_SERVICE_NAME: service name attached to all spans (default "TestService")
- OTEL_COLLECTOR_URL: address of the trace collector (default "localhost:4317")
- OTEL_SUPPORT_TLS: whether the collector connection uses TLS (default false)
- LOG_LEVEL: minimum severity emitted by the logger (default Info)
"""

import logging
from typing import Any, Optional

from pydantic import Field, ValidationInfo, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from flowwatch.levels import Level

logger = logging.getLogger(__name__)

DEFAULT_SERVICE_NAME = "TestService"
DEFAULT_COLLECTOR_URL = "localhost:4317"

_TRUE_VALUES = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_VALUES = {"0", "f", "F", "FALSE", "false", "False"}


def parse_bool(value: str) -> bool:
    """
    Parse a boolean flag.

    Accepts 1, t, T, TRUE, true, True, 0, f, F, FALSE, false, False.

    Raises:
        ValueError: If the value is not one of the accepted spellings
    """
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"invalid boolean value: {value!r}")


class OtelSettings(BaseSettings):
    """
    Telemetry connection settings loaded from OTEL_* environment variables.

    Empty or blank variables count as unset. Fields that fall back to their
    default are reported with a warning.
    """

    service_name: str = Field(
        default=DEFAULT_SERVICE_NAME,
        description="Logical service identity attached to all spans"
    )
    collector_url: str = Field(
        default=DEFAULT_COLLECTOR_URL,
        description="host:port of the OTLP/gRPC trace collector"
    )
    support_tls: bool = Field(
        default=False,
        description="Whether the collector connection must use TLS"
    )

    model_config = SettingsConfigDict(
        env_prefix="OTEL_",
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore"
    )

    @field_validator("service_name", "collector_url", mode="before")
    @classmethod
    def strip_value(cls, v: Any, info: ValidationInfo) -> Any:
        """Strip surrounding whitespace; a blank value counts as unset."""
        if not isinstance(v, str):
            return v
        v = v.strip()
        if not v:
            logger.warning("OTEL_%s not set, using default", info.field_name.upper())
            return cls.model_fields[info.field_name].default
        return v

    @field_validator("support_tls", mode="before")
    @classmethod
    def parse_support_tls(cls, v: Any) -> bool:
        """Parse the TLS flag, falling back to False when unparsable."""
        if isinstance(v, bool):
            return v
        try:
            return parse_bool(str(v).strip())
        except ValueError as e:
            logger.warning("Failed to parse OTEL_SUPPORT_TLS, using default. %s", e)
            return False

    @model_validator(mode="after")
    def report_defaults(self) -> "OtelSettings":
        """Log a warning for every field that was not configured."""
        for field_name in type(self).model_fields:
            if field_name not in self.model_fields_set:
                logger.warning(
                    "OTEL_%s not set, using default", field_name.upper()
                )
        return self


class LoggingSettings(BaseSettings):
    """Logger settings loaded from the environment."""

    log_level: Level = Field(
        default=Level.INFO,
        description="Minimum severity emitted by the logger"
    )

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def parse_log_level(cls, v: Any) -> Level:
        """Parse a level name, falling back to Info when unknown."""
        if isinstance(v, Level):
            return v
        try:
            return Level.parse(str(v))
        except ValueError as e:
            logger.warning("Failed to parse LOG_LEVEL, using default. %s", e)
            return Level.INFO


def load_otel_settings() -> OtelSettings:
    """
    Read the telemetry settings from the current environment.

    Not cached: the connection manager reads them exactly once during setup.

    Returns:
        OtelSettings: Settings with defaults applied for anything missing.
    """
    return OtelSettings()


# Global settings cache
_logging_settings_cache: Optional[LoggingSettings] = None


def get_logging_settings() -> LoggingSettings:
    """
    Get the logger settings singleton.

    Settings are loaded once and cached for subsequent calls.

    Returns:
        LoggingSettings: The logger settings.
    """
    global _logging_settings_cache

    if _logging_settings_cache is None:
        _logging_settings_cache = LoggingSettings()

    return _logging_settings_cache


def clear_settings_cache() -> None:
    """
    Clear the settings cache.

    This is primarily useful for testing to allow reloading settings
    with different environment variables.
    """
    global _logging_settings_cache
    _logging_settings_cache = None
