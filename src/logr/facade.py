from __future__ import annotations

"""
Logging Facade.

Convenience entry points (debug/info/warn/error/critical) that capture the
caller's file, function and line before handing off to the dispatcher.
"""

import sys
from typing import Optional

from logr.levels import LogLevel
from logr.service import LogrService


class Logr:
    """User-facing logger bound to a LogrService."""

    def __init__(self, service: Optional[LogrService] = None) -> None:
        self.service = service or LogrService()

    def debug(self, message: str, *, sync: bool = False, stacklevel: int = 1) -> None:
        self._log(LogLevel.DEBUG, message, sync, stacklevel)

    def info(self, message: str, *, sync: bool = False, stacklevel: int = 1) -> None:
        self._log(LogLevel.INFO, message, sync, stacklevel)

    def warn(self, message: str, *, sync: bool = False, stacklevel: int = 1) -> None:
        self._log(LogLevel.WARN, message, sync, stacklevel)

    def error(self, message: str, *, sync: bool = False, stacklevel: int = 1) -> None:
        self._log(LogLevel.ERROR, message, sync, stacklevel)

    def critical(self, message: str, *, sync: bool = False, stacklevel: int = 1) -> None:
        self._log(LogLevel.CRITICAL, message, sync, stacklevel)

    def log(self, level: LogLevel, message: str, *, sync: bool = False, stacklevel: int = 1) -> None:
        self._log(level, message, sync, stacklevel)

    def _log(self, level: LogLevel, message: str, sync: bool, stacklevel: int) -> None:
        # Frames: 0 = _log, 1 = public method, 2 = its caller
        frame = sys._getframe(stacklevel + 1)
        code = frame.f_code
        self.service.log(
            level,
            message,
            file=code.co_filename,
            function=code.co_name,
            line=frame.f_lineno,
            sync=sync,
        )
