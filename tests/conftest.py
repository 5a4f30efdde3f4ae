"""
Shared pytest fixtures and configuration for all tests.
"""
import io
import os
import uuid
from typing import Callable, Generator
from unittest.mock import MagicMock, patch

import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

# Hypothesis configuration for property-based testing
from hypothesis import settings, Verbosity, Phase

from flowwatch.levels import Level
from flowwatch.logging_helper.helper import LogHelper

# Configure Hypothesis profiles for different environments
# Default profile: balanced for local development
settings.register_profile(
    "default",
    max_examples=100,
    verbosity=Verbosity.normal,
    deadline=None,
    print_blob=True,  # Print failing examples for debugging
)

# CI profile: more thorough testing for continuous integration
settings.register_profile(
    "ci",
    max_examples=200,
    verbosity=Verbosity.verbose,
    deadline=None,
    print_blob=True,
    derandomize=True,  # Reproducible results in CI
)

# Debug profile: minimal examples for quick debugging
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    deadline=None,
    print_blob=True,
    phases=[Phase.explicit, Phase.reuse, Phase.generate],  # Skip shrinking for speed
)

# Load profile from environment variable HYPOTHESIS_PROFILE, default to "default"
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "default"))


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Run the test with an empty process environment."""
    with patch.dict(os.environ, {}, clear=True):
        yield


@pytest.fixture
def span_exporter() -> InMemorySpanExporter:
    """In-memory exporter collecting the spans of the test tracer."""
    return InMemorySpanExporter()


@pytest.fixture
def tracer(span_exporter: InMemorySpanExporter):
    """A tracer from a local provider; the global provider is left alone."""
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    yield provider.get_tracer("flowwatch-tests")
    provider.shutdown()


@pytest.fixture
def log_stream() -> io.StringIO:
    """Stream receiving the JSON lines of the test logger."""
    return io.StringIO()


@pytest.fixture
def mock_shutdown() -> MagicMock:
    """Stand-in for the connection manager's shutdown function."""
    return MagicMock(return_value=[])


@pytest.fixture
def mock_exit() -> MagicMock:
    """Stand-in for sys.exit so fatal entries do not end the test run."""
    return MagicMock()


@pytest.fixture
def make_log_helper(
    log_stream: io.StringIO,
    mock_shutdown: MagicMock,
    mock_exit: MagicMock,
) -> Callable[..., LogHelper]:
    """Factory for LogHelpers with a unique logger name and mocked exits."""
    def factory(**kwargs) -> LogHelper:
        kwargs.setdefault("name", f"flowwatch-test-{uuid.uuid4().hex}")
        kwargs.setdefault("level", Level.DEBUG)
        kwargs.setdefault("stream", log_stream)
        kwargs.setdefault("shutdown", mock_shutdown)
        kwargs.setdefault("exit_func", mock_exit)
        return LogHelper(**kwargs)

    return factory
