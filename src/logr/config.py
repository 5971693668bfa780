from __future__ import annotations

"""
Target Configuration Models.

Immutable value objects describing how each target filters and persists
messages, plus a lenient JSON loader that coerces untrusted input into a
validated FileTargetConfig.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple

from logr.errors import ConfigError
from logr.levels import LogLevel, Style, TimeSpan, parse_time_span

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# DEFAULTS
# -----------------------------------------------------------------------------
DEFAULT_FILE_NAME = "file"
DEFAULT_FILE_EXTENSION = "log"
DEFAULT_MAX_ARCHIVED_FILES_COUNT = 1
DEFAULT_MAX_FILE_SIZE_IN_BYTES = 20 * 1024 * 1024  # 20 MiB
ARCHIVE_DIR_NAME = "archive"

ALL_LEVELS: FrozenSet[LogLevel] = frozenset(LogLevel)


def _as_level_set(levels: Iterable[Any]) -> FrozenSet[LogLevel]:
    out = set()
    for lvl in levels:
        if isinstance(lvl, LogLevel):
            out.add(lvl)
        elif isinstance(lvl, str):
            out.add(LogLevel.from_name(lvl))
        else:
            out.add(LogLevel(lvl))
    return frozenset(out)


# -----------------------------------------------------------------------------
# CONFIGURATION MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileTargetConfig:
    """
    Immutable preferences of a file target.

    Attributes:
        file_name: Base name of the active log file.
        file_extension: Extension without the leading dot.
        max_archived_files_count: Number of archived files retained.
        archive_frequency: Age bucket at which the active file is due.
        max_file_size_in_bytes: Size above which the active file is due.
        levels: Enabled levels. Filtering is by membership.
        style: Line rendering style.
    """
    file_name: str = DEFAULT_FILE_NAME
    file_extension: str = DEFAULT_FILE_EXTENSION
    max_archived_files_count: int = DEFAULT_MAX_ARCHIVED_FILES_COUNT
    archive_frequency: TimeSpan = TimeSpan.DAY
    max_file_size_in_bytes: int = DEFAULT_MAX_FILE_SIZE_IN_BYTES
    levels: FrozenSet[LogLevel] = field(default=ALL_LEVELS)
    style: Style = Style.MINIMAL

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "levels", _as_level_set(self.levels))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid levels: {e}") from e

        for attr in ("file_name", "file_extension"):
            value = getattr(self, attr)
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(f"'{attr}' must be a non-empty string.")
            if "/" in value or "\\" in value or os.sep in value:
                raise ConfigError(f"'{attr}' must not contain path separators: {value!r}")

        if self.max_archived_files_count < 0:
            raise ConfigError("'max_archived_files_count' must be >= 0.")
        if self.max_file_size_in_bytes < 0:
            raise ConfigError("'max_file_size_in_bytes' must be >= 0.")

    @property
    def full_file_name(self) -> str:
        return f"{self.file_name}.{self.file_extension}"

    @property
    def full_archive_file_name(self) -> str:
        """Path of the newest archive relative to the log directory."""
        return f"{ARCHIVE_DIR_NAME}/{self.archive_file_name(0)}"

    def archive_file_name(self, index: int) -> str:
        return f"{self.file_name}.{index}.{self.file_extension}"


@dataclass(frozen=True)
class ConsoleTargetConfig:
    """Preferences of a console target."""
    levels: FrozenSet[LogLevel] = field(default=ALL_LEVELS)
    style: Style = Style.MINIMAL

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "levels", _as_level_set(self.levels))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid levels: {e}") from e


# -----------------------------------------------------------------------------
# JSON LOADING
# -----------------------------------------------------------------------------

def load_file_target_config(
        path: str,
        *,
        strict: bool = False,
) -> Tuple[FileTargetConfig, List[str]]:
    """
    Read a FileTargetConfig from a JSON object on disk.

    Unknown keys are ignored. In lenient mode, malformed values fall back to
    defaults and are reported as warnings; in strict mode they raise.

    Args:
        path: Path to the JSON file.
        strict: If True, raise ConfigError instead of collecting warnings.

    Returns:
        Tuple[FileTargetConfig, List[str]]: The config and any warnings.
    """
    warnings: List[str] = []

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, ValueError) as e:
        msg = f"Could not read config file '{path}': {e}"
        if strict:
            raise ConfigError(msg) from e
        logger.warning(msg)
        warnings.append(f"{msg} Using defaults.")
        return FileTargetConfig(), warnings

    return config_from_mapping(raw, strict=strict, warnings=warnings), warnings


def config_from_mapping(
        raw: Any,
        *,
        strict: bool = False,
        warnings: Optional[List[str]] = None,
) -> FileTargetConfig:
    """
    Coerce a raw mapping (JSON, CLI overrides) into a FileTargetConfig.

    Args:
        raw: Mapping with any subset of the FileTargetConfig field names.
        strict: If True, raise ConfigError on the first malformed value.
        warnings: Optional list collecting lenient-mode notices.

    Returns:
        FileTargetConfig: Validated configuration.
    """
    if warnings is None:
        warnings = []

    if not isinstance(raw, dict):
        msg = f"Invalid config type: expected object, received {type(raw).__name__}."
        if strict:
            raise ConfigError(msg)
        warnings.append(f"{msg} Using defaults.")
        return FileTargetConfig()

    kwargs: Dict[str, Any] = {}

    for key in ("file_name", "file_extension"):
        value = _as_str(raw.get(key), key, warnings, strict)
        if value is not None:
            kwargs[key] = value

    for key in ("max_archived_files_count", "max_file_size_in_bytes"):
        value = _as_non_negative_int(raw.get(key), key, warnings, strict)
        if value is not None:
            kwargs[key] = value

    frequency = raw.get("archive_frequency")
    if frequency is not None:
        try:
            kwargs["archive_frequency"] = parse_time_span(frequency)
        except ValueError as e:
            _reject(str(e), warnings, strict)

    style = raw.get("style")
    if style is not None:
        try:
            kwargs["style"] = Style(str(style).strip().lower())
        except ValueError:
            _reject(f"Unknown style: {style!r}", warnings, strict)

    levels = raw.get("levels")
    if levels is not None:
        if isinstance(levels, list):
            try:
                kwargs["levels"] = _as_level_set(levels)
            except (TypeError, ValueError) as e:
                _reject(f"Invalid levels: {e}", warnings, strict)
        else:
            _reject("Invalid field 'levels': expected list.", warnings, strict)

    return FileTargetConfig(**kwargs)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _reject(msg: str, warnings: List[str], strict: bool) -> None:
    if strict:
        raise ConfigError(msg)
    warnings.append(f"{msg} Using default.")


def _as_str(value: Any, field_name: str, warnings: List[str], strict: bool) -> Optional[str]:
    """Validate and sanitize string inputs."""
    if value is None:
        return None
    if isinstance(value, str) and value.strip():
        return value.strip()
    _reject(f"Invalid field '{field_name}': expected non-empty str.", warnings, strict)
    return None


def _as_non_negative_int(value: Any, field_name: str, warnings: List[str], strict: bool) -> Optional[int]:
    """Accept ints and integral strings; booleans are rejected."""
    if value is None:
        return None
    if isinstance(value, bool):
        _reject(f"Invalid field '{field_name}': expected int, received bool.", warnings, strict)
        return None
    if isinstance(value, str) and not strict:
        try:
            converted = int(value.strip())
            warnings.append(f"Field '{field_name}' converted from '{value}' to {converted}.")
            value = converted
        except ValueError:
            pass
    if isinstance(value, int) and value >= 0:
        return value
    _reject(f"Invalid field '{field_name}': expected non-negative int.", warnings, strict)
    return None
