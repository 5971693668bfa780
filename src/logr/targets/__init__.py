from __future__ import annotations

from .base import Target, format_line
from .console import ConsoleTarget
from .file import FileTarget

__all__ = [
    "Target",
    "format_line",
    "ConsoleTarget",
    "FileTarget",
]
