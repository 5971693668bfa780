from __future__ import annotations

"""
Message Dispatcher.

Builds Message objects and fans them out to every registered target.
Targets are independent: one failing target never prevents delivery to
the others.
"""

import logging
import threading
from typing import Iterable, List, Optional, Tuple

from logr.levels import LogLevel
from logr.message import Message, MetaInfo
from logr.targets.base import Target
from logr.targets.console import ConsoleTarget

logger = logging.getLogger(__name__)


class LogrService:
    """
    Registry of targets and entry point for dispatch.

    Attributes:
        targets: Snapshot of the registered targets.
    """

    def __init__(self, targets: Optional[Iterable[Target]] = None) -> None:
        self._targets: List[Target] = list(targets) if targets is not None else [ConsoleTarget()]
        self._lock = threading.Lock()

    @property
    def targets(self) -> Tuple[Target, ...]:
        with self._lock:
            return tuple(self._targets)

    def add_target(self, target: Target) -> None:
        with self._lock:
            if target not in self._targets:
                self._targets.append(target)

    def remove_target(self, target: Target) -> None:
        """Unregister a target. The caller owns closing it."""
        with self._lock:
            if target in self._targets:
                self._targets.remove(target)

    def log(
            self,
            level: LogLevel,
            message: str,
            file: str,
            function: str,
            line: int,
            sync: bool = False,
    ) -> None:
        """
        Build a Message from a call site and dispatch it.

        Args:
            level: Severity.
            message: Message body.
            file: Caller source file.
            function: Caller function name.
            line: Caller line number.
            sync: Wait until every target has persisted the message.
        """
        meta = MetaInfo(file=file, function=function, line=line)
        self.dispatch(Message(level=level, text=message, meta=meta), sync=sync)

    def dispatch(self, message: Message, *, sync: bool = False) -> None:
        for target in self.targets:
            try:
                target.send(message)
            except Exception as e:
                logger.warning(f"LogrService: Target {type(target).__name__} rejected a message: {e}")
        if sync:
            self.flush()

    def flush(self, timeout: Optional[float] = None) -> bool:
        """Wait for every target; False if any of them timed out."""
        results = [target.flush(timeout) for target in self.targets]
        return all(results)

    def archive(self) -> None:
        """Force rotation on every target that supports archiving."""
        for target in self.targets:
            archive = getattr(target, "archive", None)
            if callable(archive):
                archive()

    def close(self) -> None:
        for target in self.targets:
            target.close()
