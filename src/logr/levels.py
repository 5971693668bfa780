from __future__ import annotations

"""
Severity Levels and Enumerations.

Defines the ordered severity scale used for filtering, the coarse time
buckets used by the archival policy, and the line rendering styles.
"""

import logging
from enum import Enum, IntEnum
from typing import Dict

# -----------------------------------------------------------------------------
# SEVERITY
# -----------------------------------------------------------------------------

class LogLevel(IntEnum):
    """Ordered severity of a log message."""

    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    CRITICAL = 4

    @property
    def title(self) -> str:
        """Capitalized English name used as the line prefix (e.g. 'Warn')."""
        return self.name.capitalize()

    @classmethod
    def from_name(cls, name: str) -> LogLevel:
        """
        Resolve a level from its textual name.

        Accepts any casing and the stdlib spelling 'warning'.

        Raises:
            ValueError: If the name matches no level.
        """
        key = (name or "").strip().upper()
        if key == "WARNING":
            key = "WARN"
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown log level: {name!r}") from None

    @classmethod
    def from_logging(cls, levelno: int) -> LogLevel:
        """Map a stdlib logging number onto the closest level at or below it."""
        if levelno >= logging.CRITICAL:
            return cls.CRITICAL
        if levelno >= logging.ERROR:
            return cls.ERROR
        if levelno >= logging.WARNING:
            return cls.WARN
        if levelno >= logging.INFO:
            return cls.INFO
        return cls.DEBUG


# -----------------------------------------------------------------------------
# ARCHIVAL TIME BUCKETS
# -----------------------------------------------------------------------------

class TimeSpan(IntEnum):
    """Coarse age buckets, ranked from finest to coarsest."""

    MINUTE = 0
    HOUR = 1
    DAY = 2
    WEEK = 3
    MONTH = 4


_TIME_SPAN_ALIASES: Dict[str, TimeSpan] = {
    "minute": TimeSpan.MINUTE,
    "hour": TimeSpan.HOUR,
    "hourly": TimeSpan.HOUR,
    "day": TimeSpan.DAY,
    "daily": TimeSpan.DAY,
    "week": TimeSpan.WEEK,
    "weekly": TimeSpan.WEEK,
    "month": TimeSpan.MONTH,
    "monthly": TimeSpan.MONTH,
}


def parse_time_span(value: str) -> TimeSpan:
    """
    Convert a human label ('day', 'weekly', ...) into a TimeSpan.

    Raises:
        ValueError: If the label is not recognized.
    """
    span = _TIME_SPAN_ALIASES.get(str(value).strip().lower())
    if span is None:
        raise ValueError(f"Unknown archive frequency: {value!r}")
    return span


# -----------------------------------------------------------------------------
# RENDERING
# -----------------------------------------------------------------------------

class Style(Enum):
    """Line rendering style. VERBOSE prefixes the call-site metadata."""

    MINIMAL = "minimal"
    VERBOSE = "verbose"
