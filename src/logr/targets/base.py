from __future__ import annotations

"""
Target Abstraction.

A target receives every dispatched message and decides on its own whether
and how to persist it.
"""

from abc import ABC, abstractmethod
from typing import Optional

from logr.levels import Style
from logr.message import Message


def format_line(message: Message, style: Style) -> str:
    """
    Render a message as a single newline-terminated line.

    Layout: '[<meta> ]<LevelTitle>: <text>\\n', the metadata prefix being
    present only for the verbose style.
    """
    meta_text = f"{message.meta.text} " if style is Style.VERBOSE else ""
    return f"{meta_text}{message.level.title}: {message.text}\n"


class Target(ABC):
    """Destination of dispatched messages."""

    @abstractmethod
    def send(self, message: Message) -> None:
        """Accept a message. Must not raise for runtime I/O problems."""

    def flush(self, timeout: Optional[float] = None) -> bool:
        """Wait until previously sent messages are persisted."""
        return True

    def close(self) -> None:
        """Release resources held by the target."""
