from __future__ import annotations

"""
Console Target.

Writes formatted lines synchronously to a text stream (stdout by default).
"""

import sys
import threading
from typing import Optional, TextIO

from logr.config import ConsoleTargetConfig
from logr.message import Message
from logr.targets.base import Target, format_line


class ConsoleTarget(Target):
    """Target printing each enabled message to a stream."""

    def __init__(self, config: Optional[ConsoleTargetConfig] = None, stream: Optional[TextIO] = None) -> None:
        self.config = config or ConsoleTargetConfig()
        self._stream = stream
        self._lock = threading.Lock()

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so redirections of sys.stdout are honoured
        return self._stream if self._stream is not None else sys.stdout

    def send(self, message: Message) -> None:
        if message.level not in self.config.levels:
            return
        line = format_line(message, self.config.style)
        if not line.strip():
            return
        with self._lock:
            try:
                self.stream.write(line)
                self.stream.flush()
            except (OSError, ValueError):
                # Closed or broken stream: the line is dropped
                pass
