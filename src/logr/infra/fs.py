from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Thin abstraction over 'os' used by the file target: directory and file
creation, append handles, moves, deletes, listings and stat. Every method
raises OSError on failure; the caller decides whether a failure matters.
"""

import os
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import BinaryIO, Dict, List, Optional

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "Logr"
UNIX_APP_DIR_NAME = ".logr"
LOGS_SUBDIR = "logs"

# Extended attribute holding the creation stamp where no birth time exists
_CREATED_XATTR = "user.logr.created"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/Logr
    - Linux/Mac: ~/.logr

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        home = os.path.expanduser("~")
        path = os.path.join(home, UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def get_default_log_dir() -> str:
    """Directory holding active log files when no base directory is given."""
    return os.path.join(get_user_data_dir(), LOGS_SUBDIR)


# -----------------------------------------------------------------------------
# DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileStat:
    """
    Subset of file metadata used by the archival policy.

    Attributes:
        size: Size in bytes.
        created: Creation instant (epoch seconds).
        modified: Last modification instant (epoch seconds).
    """
    size: int
    created: float
    modified: float


class LogFileHandle:
    """Binary append handle over an open log file."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream

    @property
    def closed(self) -> bool:
        return self._stream.closed

    def seek_to_end(self) -> None:
        self._stream.seek(0, os.SEEK_END)

    def write(self, data: bytes) -> None:
        self._stream.write(data)

    def sync(self) -> None:
        """Push buffered bytes to the OS and force them to storage."""
        self._stream.flush()
        os.fsync(self._stream.fileno())

    def close(self) -> None:
        self._stream.close()


# -----------------------------------------------------------------------------
# COLLABORATOR INTERFACE
# -----------------------------------------------------------------------------

class FileSystem(ABC):
    """Filesystem operations required by the file target."""

    @abstractmethod
    def create_directory(self, path: str) -> None: ...

    @abstractmethod
    def file_exists(self, path: str) -> bool: ...

    @abstractmethod
    def create_file(self, path: str, created: Optional[float] = None) -> None: ...

    @abstractmethod
    def open_for_append(self, path: str) -> LogFileHandle: ...

    @abstractmethod
    def move(self, src: str, dst: str) -> None: ...

    @abstractmethod
    def delete(self, path: str) -> None: ...

    @abstractmethod
    def list_directory(self, path: str) -> List[str]: ...

    @abstractmethod
    def stat(self, path: str) -> FileStat: ...


class LocalFileSystem(FileSystem):
    """
    FileSystem backed by the local disk.

    Creation time comes from 'st_birthtime' where the platform exposes it.
    Elsewhere (most Linux setups) the instant passed to create_file is
    stored in the 'user.logr.created' extended attribute, which survives
    renames and process restarts. Where xattrs are unsupported the stamp
    is only remembered in memory, and files created by another process are
    aged from the modification time first observed by this instance.
    """

    def __init__(self) -> None:
        self._created: Dict[str, float] = {}
        self._lock = threading.Lock()

    def create_directory(self, path: str) -> None:
        os.makedirs(path, exist_ok=True)

    def file_exists(self, path: str) -> bool:
        return os.path.isfile(path)

    def create_file(self, path: str, created: Optional[float] = None) -> None:
        # 'xb' refuses to truncate a file that appeared in the meantime
        with open(path, "xb"):
            pass
        stamp = time.time() if created is None else created
        _write_created_xattr(path, stamp)
        with self._lock:
            self._created[os.path.abspath(path)] = stamp

    def open_for_append(self, path: str) -> LogFileHandle:
        # Pin the creation stamp of pre-existing files before the first append
        self.stat(path)
        return LogFileHandle(open(path, "ab"))

    def move(self, src: str, dst: str) -> None:
        os.replace(src, dst)
        with self._lock:
            stamp = self._created.pop(os.path.abspath(src), None)
            if stamp is not None:
                self._created[os.path.abspath(dst)] = stamp

    def delete(self, path: str) -> None:
        os.remove(path)
        with self._lock:
            self._created.pop(os.path.abspath(path), None)

    def list_directory(self, path: str) -> List[str]:
        return [os.path.join(path, name) for name in os.listdir(path)]

    def stat(self, path: str) -> FileStat:
        st = os.stat(path)
        created = getattr(st, "st_birthtime", None)
        if created is None:
            created = _read_created_xattr(path)
        if created is None:
            key = os.path.abspath(path)
            with self._lock:
                created = self._created.setdefault(key, st.st_mtime)
        return FileStat(size=st.st_size, created=created, modified=st.st_mtime)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: CREATION STAMP
# -----------------------------------------------------------------------------

def _write_created_xattr(path: str, stamp: float) -> None:
    """Persist the creation stamp; silently skipped where xattrs are unsupported."""
    if not hasattr(os, "setxattr"):
        return
    try:
        os.setxattr(path, _CREATED_XATTR, repr(stamp).encode("ascii"))
    except OSError:
        pass


def _read_created_xattr(path: str) -> Optional[float]:
    if not hasattr(os, "getxattr"):
        return None
    try:
        return float(os.getxattr(path, _CREATED_XATTR).decode("ascii"))
    except (OSError, ValueError):
        return None
