from __future__ import annotations

"""
Exception Hierarchy.

Only configuration problems surface as exceptions. Runtime filesystem
failures inside targets are handled best-effort and never reach callers.
"""


class LogrError(Exception):
    """Base class for every error raised by the logr package."""


class ConfigError(LogrError, ValueError):
    """Raised when a target configuration holds an invalid value."""
