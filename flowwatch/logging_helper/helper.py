"""
Structured logger with a trace bridge.

LogHelper is the abstraction callers log through, so the logging library
can be swapped without touching call sites. Every logging method takes an
OpenTelemetry Context first; the hooks use it to find the span the entry
belongs to.

Usage:
    setup_otel_helper()
    log = get_log_helper()

    with tracer.start_as_current_span("checkout") as span:
        ctx = trace.set_span_in_context(span)
        log.warn(ctx, "payment retried", attempt=2)
"""

import logging
import sys
from typing import IO, Any, Callable, Iterable, List, Optional

from opentelemetry.context import Context

from flowwatch.config.settings import get_logging_settings
from flowwatch.levels import Level
from flowwatch.logging_helper.formatter import JSONFormatter
from flowwatch.logging_helper.hooks import (
    ContextHook,
    LogEntry,
    LogHook,
    OtelHook,
    OtelShutdownHook,
)
from flowwatch.once import Once
from flowwatch.otel_helper import get_otel_helper

logger = logging.getLogger(__name__)

DEFAULT_LOGGER_NAME = "flowwatch"

FATAL_EXIT_CODE = 1


def default_hooks(shutdown: Callable[[], Any]) -> List[LogHook]:
    """The hooks every LogHelper gets unless told otherwise, in order."""
    return [ContextHook(), OtelHook(), OtelShutdownHook(shutdown)]


class LogHelper:
    """
    Structured JSON logger that forwards entries to the active span.

    Args:
        name: Name of the underlying ``logging`` logger
        level: Minimum severity emitted
        stream: Where JSON lines are written (stdout by default)
        hooks: Ordered hooks; defaults to ``default_hooks(shutdown)``
        shutdown: Called before a fatal entry ends the process
        exit_func: Terminates the process after a fatal entry
    """

    def __init__(
        self,
        name: str = DEFAULT_LOGGER_NAME,
        level: Level = Level.INFO,
        stream: Optional[IO[str]] = None,
        hooks: Optional[Iterable[LogHook]] = None,
        shutdown: Optional[Callable[[], Any]] = None,
        exit_func: Callable[[int], Any] = sys.exit,
    ):
        if shutdown is None:
            shutdown = get_otel_helper().shutdown
        self._shutdown = shutdown
        self.hooks: List[LogHook] = list(hooks) if hooks is not None else default_hooks(shutdown)
        self._exit = exit_func

        self.logger = logging.getLogger(name)
        self.logger.propagate = False

        # Remove existing handlers to avoid duplicate logs
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)

        handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
        handler.setFormatter(JSONFormatter())
        self.logger.addHandler(handler)
        self.set_level(level)

    @property
    def level(self) -> Level:
        return Level.from_threshold(self.logger.getEffectiveLevel())

    def set_level(self, level: Level) -> None:
        """Change the minimum severity emitted, effective immediately."""
        self.logger.setLevel(level.logging_level)

    def is_level_enabled(self, level: Level) -> bool:
        return self.logger.isEnabledFor(level.logging_level)

    def add_hook(self, hook: LogHook) -> None:
        """Append a hook; it runs after the hooks already registered."""
        self.hooks.append(hook)

    # Logging methods. Each calls _log directly: the call-site lookup in
    # ContextHook depends on this call depth.

    def debug(self, ctx: Optional[Context], *args: Any, **fields: Any) -> None:
        """Log a message at the debug level."""
        self._log(Level.DEBUG, ctx, args, fields)

    def info(self, ctx: Optional[Context], *args: Any, **fields: Any) -> None:
        """Log a message at the info level."""
        self._log(Level.INFO, ctx, args, fields)

    def warn(self, ctx: Optional[Context], *args: Any, **fields: Any) -> None:
        """Log a message at the warning level."""
        self._log(Level.WARN, ctx, args, fields)

    def error(self, ctx: Optional[Context], *args: Any, **fields: Any) -> None:
        """Log a message at the error level."""
        self._log(Level.ERROR, ctx, args, fields)

    def fatal(self, ctx: Optional[Context], *args: Any, **fields: Any) -> None:
        """
        Log a message at the fatal level, then terminate the process.

        The hooks, including the telemetry shutdown, have completed before
        the process exits. When the entry is filtered out, for example by
        ``logging.disable``, the telemetry is still shut down.
        """
        if not self._log(Level.FATAL, ctx, args, fields):
            self._shutdown()
        self._exit(FATAL_EXIT_CODE)

    def _log(
        self,
        level: Level,
        ctx: Optional[Context],
        args: tuple,
        fields: dict,
    ) -> bool:
        """Run the hooks and write the entry; False if the level is disabled."""
        if not self.is_level_enabled(level):
            return False

        entry = LogEntry(
            level=level,
            message=" ".join(str(arg) for arg in args),
            data=dict(fields),
            context=ctx,
        )
        self._fire_hooks(entry)
        self.logger.log(
            level.logging_level,
            entry.message,
            extra={"extra_data": entry.data, "entry_time": entry.time},
        )
        return True

    def _fire_hooks(self, entry: LogEntry) -> None:
        for hook in self.hooks:
            if entry.level not in hook.levels:
                continue
            try:
                hook.fire(entry)
            except Exception as e:
                # A failing hook must not keep the others or the entry from running
                logger.warning(
                    "Failed to fire hook %s: %s", type(hook).__name__, e
                )


_log_helper: Optional[LogHelper] = None
_once = Once()


def _init_log_helper() -> None:
    global _log_helper
    _log_helper = LogHelper(level=get_logging_settings().log_level)


def get_log_helper() -> LogHelper:
    """
    Get the process-wide LogHelper, creating it on first use.

    The fatal shutdown hook is bound to the process-wide connection manager.
    """
    _once.do(_init_log_helper)
    return _log_helper


def reset_log_helper() -> None:
    """
    Forget the process-wide LogHelper.

    This is primarily useful for testing.
    """
    global _log_helper, _once
    _log_helper = None
    _once = Once()


def set_log_level(level: Level) -> None:
    """Update the minimum severity of the process-wide logger."""
    get_log_helper().set_level(level)
