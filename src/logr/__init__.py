from __future__ import annotations

import logging

from .config import ConsoleTargetConfig, FileTargetConfig, load_file_target_config
from .errors import ConfigError, LogrError
from .facade import Logr
from .handlers import LogrHandler, attach_to_logging
from .levels import LogLevel, Style, TimeSpan
from .message import Message, MetaInfo
from .service import LogrService
from .targets import ConsoleTarget, FileTarget, Target

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ConsoleTarget",
    "ConsoleTargetConfig",
    "ConfigError",
    "FileTarget",
    "FileTargetConfig",
    "LogLevel",
    "Logr",
    "LogrError",
    "LogrHandler",
    "LogrService",
    "Message",
    "MetaInfo",
    "Style",
    "Target",
    "TimeSpan",
    "attach_to_logging",
    "load_file_target_config",
]
