from __future__ import annotations

"""
Message Data Models.

Immutable value objects that travel from the facade, through the dispatcher,
into every registered target.
"""

import os
from dataclasses import dataclass, field
from datetime import datetime, timezone

from logr.levels import LogLevel


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class MetaInfo:
    """
    Call-site metadata attached to a message.

    Attributes:
        file: Source file path of the caller.
        function: Name of the calling function.
        line: Line number of the call.
    """
    file: str
    function: str
    line: int

    @property
    def text(self) -> str:
        """Compact rendering used by the verbose style."""
        return f"[{os.path.basename(self.file)}:{self.line}] {self.function}"


@dataclass(frozen=True)
class Message:
    """
    A single log event.

    Attributes:
        level: Severity of the event.
        text: Free-form message body.
        meta: Call-site metadata.
        created: Instant the event was produced (UTC).
    """
    level: LogLevel
    text: str
    meta: MetaInfo
    created: datetime = field(default_factory=_utc_now)
