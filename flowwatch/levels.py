"""
Log levels for FlowWatch.

Level abstracts the severity from the logging library so callers never
import ``logging`` constants directly.
"""

import logging
from enum import IntEnum


class Level(IntEnum):
    """Ordered log severity, from least to most urgent."""

    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    FATAL = 4

    def __str__(self) -> str:
        return _CANONICAL_NAMES[self]

    @property
    def logging_level(self) -> int:
        """The standard library level number for this severity."""
        return _TO_LOGGING[self]

    @classmethod
    def from_logging_level(cls, value: int) -> "Level":
        """
        Translate a standard library level number back to a Level.

        Raises:
            ValueError: If the number is not one of the five mapped levels
        """
        try:
            return _FROM_LOGGING[value]
        except KeyError:
            raise ValueError(f"no Level for logging level {value!r}") from None

    @classmethod
    def from_threshold(cls, value: int) -> "Level":
        """
        The least severe Level a logger with threshold ``value`` emits.

        Works for any level number, including ones set outside FlowWatch
        (``NOTSET``, custom levels). Thresholds above Fatal map to Fatal.
        """
        for level in cls:
            if level.logging_level >= value:
                return level
        return cls.FATAL

    @classmethod
    def parse(cls, name: str) -> "Level":
        """
        Parse a level name, case-insensitively.

        Accepts the canonical names as well as the standard library names
        ``warning`` and ``critical``.

        Raises:
            ValueError: If the name is not recognized
        """
        key = name.strip().lower()
        try:
            return _BY_NAME[key]
        except KeyError:
            raise ValueError(f"unknown log level: {name!r}") from None


_CANONICAL_NAMES = {
    Level.DEBUG: "Debug",
    Level.INFO: "Info",
    Level.WARN: "Warn",
    Level.ERROR: "Error",
    Level.FATAL: "Fatal",
}

_TO_LOGGING = {
    Level.DEBUG: logging.DEBUG,
    Level.INFO: logging.INFO,
    Level.WARN: logging.WARNING,
    Level.ERROR: logging.ERROR,
    Level.FATAL: logging.CRITICAL,
}

_FROM_LOGGING = {v: k for k, v in _TO_LOGGING.items()}

_BY_NAME = {name.lower(): level for level, name in _CANONICAL_NAMES.items()}
_BY_NAME.update({"warning": Level.WARN, "critical": Level.FATAL})
