from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Factories for file targets rooted in a temporary directory, closed
   automatically at teardown so no worker thread outlives its test.
"""

import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Generator, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from logr.levels import LogLevel  # noqa: E402
from logr.message import Message, MetaInfo  # noqa: E402
from logr.targets.file import FileTarget  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def log_dir(tmp_path: Path) -> Path:
    """Directory that plays the role of the base log directory."""
    path = tmp_path / "logs"
    return path


@pytest.fixture
def make_target(log_dir: Path) -> Generator[Callable[..., FileTarget], None, None]:
    """
    Build FileTargets under 'log_dir' and close them after the test.

    Yields:
        Callable[..., FileTarget]: Factory accepting FileTarget kwargs.
    """
    created: List[FileTarget] = []

    def _factory(config: Any = None, **kwargs: Any) -> FileTarget:
        kwargs.setdefault("base_dir", str(log_dir))
        target = FileTarget(config, **kwargs)
        created.append(target)
        return target

    yield _factory

    for target in created:
        target.close()


@pytest.fixture
def make_message() -> Callable[..., Message]:
    """Factory for messages with fixed call-site metadata."""

    def _factory(text: str, level: LogLevel = LogLevel.INFO) -> Message:
        return Message(
            level=level,
            text=text,
            meta=MetaInfo(file="/app/src/service.py", function="handle", line=42),
            created=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
        )

    return _factory
