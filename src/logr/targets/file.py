from __future__ import annotations

"""
File Target.

Persists messages to one active log file and manages its lifecycle: the
rotation policy (size and age), renumbering of archived files, retention
pruning, and an asynchronous write path.

All file work (open, append, sync, close, rotation) is funnelled through a
single SerialExecutor owned by the target, so writes never interleave with
a rotation and a write sent before archive() lands in the archived file.
Filesystem failures on these paths are swallowed: logging must never crash
or block the host application.
"""

import atexit
import calendar
import logging
import os
import re
import time
from datetime import datetime
from typing import Any, Callable, List, Optional

from logr.config import ARCHIVE_DIR_NAME, FileTargetConfig
from logr.executor import SerialExecutor
from logr.infra.fs import FileSystem, LocalFileSystem, LogFileHandle, get_default_log_dir
from logr.levels import TimeSpan
from logr.message import Message
from logr.targets.base import Target, format_line
from logr.utils.sorting import natural_sorted

# Diagnostics go to stdlib logging only, never back into a logr target
logger = logging.getLogger(__name__)

_SECONDS_PER_MINUTE = 60
_SECONDS_PER_HOUR = 60 * _SECONDS_PER_MINUTE
_SECONDS_PER_DAY = 24 * _SECONDS_PER_HOUR
_SECONDS_PER_WEEK = 7 * _SECONDS_PER_DAY


# -----------------------------------------------------------------------------
# AGE BUCKETING
# -----------------------------------------------------------------------------

def _add_months(moment: datetime, months: int) -> datetime:
    """Shift by whole calendar months, clamping the day to the month length."""
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def _whole_months_between(start: datetime, end: datetime) -> int:
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if months > 0 and _add_months(start, months) > end:
        months -= 1
    return max(months, 0)


def time_span_between(start: datetime, end: datetime) -> Optional[TimeSpan]:
    """
    Bucket the elapsed time between two instants into the coarsest unit.

    Checked month -> week -> day -> hour -> minute; months are calendar
    months, not 30-day blocks.

    Args:
        start: Earlier instant (file creation).
        end: Later instant (last modification).

    Returns:
        Optional[TimeSpan]: The bucket, or None below one minute.
    """
    if _whole_months_between(start, end) >= 1:
        return TimeSpan.MONTH

    elapsed = (end - start).total_seconds()
    if elapsed >= _SECONDS_PER_WEEK:
        return TimeSpan.WEEK
    if elapsed >= _SECONDS_PER_DAY:
        return TimeSpan.DAY
    if elapsed >= _SECONDS_PER_HOUR:
        return TimeSpan.HOUR
    if elapsed >= _SECONDS_PER_MINUTE:
        return TimeSpan.MINUTE
    return None


# -----------------------------------------------------------------------------
# FILE TARGET
# -----------------------------------------------------------------------------

class FileTarget(Target):
    """
    Target logging to a file with numbered archives.

    On-disk layout:
        <base>/<name>.<ext>                   active file
        <base>/archive/<name>.<index>.<ext>   archives, index 0 newest

    The age policy needs the active file's creation time. Where the OS
    reports no birth time (Linux), LocalFileSystem keeps it in an extended
    attribute; on filesystems without xattrs a file reopened by a new
    process is aged from its modification time at open, so its age clock
    restarts with each process.

    Attributes:
        config: Preferences assigned at construction.
        base_log_directory: Directory holding the active file.
        full_log_file_path: Path of the active file.
        archive_path: Directory holding the archived files.
        auto_archive: If True, the rotation policy is evaluated after each write.
    """

    def __init__(
            self,
            config: Optional[FileTargetConfig] = None,
            base_dir: Optional[str] = None,
            fs: Optional[FileSystem] = None,
            *,
            auto_archive: bool = False,
    ) -> None:
        """
        Prepare the active file for receiving messages.

        Returns once the active file exists and is open for append.

        Args:
            config: Logging preferences. Defaults to FileTargetConfig().
            base_dir: Directory for the active file. Defaults to the per-user
                      logs directory.
            fs: Filesystem collaborator. Defaults to LocalFileSystem().
            auto_archive: Evaluate the rotation policy after every write.
        """
        self.config = config or FileTargetConfig()
        self.fs = fs or LocalFileSystem()
        self.auto_archive = auto_archive

        self.base_log_directory = os.path.abspath(base_dir or get_default_log_dir())
        self.full_log_file_path = os.path.join(self.base_log_directory, self.config.full_file_name)
        self.archive_path = os.path.join(self.base_log_directory, ARCHIVE_DIR_NAME)

        self._archive_name_re = re.compile(
            rf"^{re.escape(self.config.file_name)}\.(\d+)\.{re.escape(self.config.file_extension)}$"
        )

        # Owned by the worker thread exclusively
        self._handle: Optional[LogFileHandle] = None

        self._executor = SerialExecutor(name=f"logr-file-{self.config.file_name}")
        self._executor.submit(self._init_file)
        self._executor.join()

        atexit.register(self.close)

    # -------------------------------------------------------------------------
    # PUBLIC API
    # -------------------------------------------------------------------------

    def send(self, message: Message) -> None:
        if message.level not in self.config.levels:
            return
        self.write(format_line(message, self.config.style))

    def write(self, line: str) -> None:
        """Enqueue a pre-formatted line. Blank lines are discarded."""
        if not line.strip():
            return
        data = line.encode("utf-8")
        self._executor.submit(lambda: self._append(data))

    def archive(self) -> None:
        """
        Force rotation of the active file regardless of the policy.

        Non-blocking: the rotation runs on the worker after previously
        queued writes.
        """
        self._executor.submit(self._rotate)

    def archive_if_needed(self) -> None:
        if self.should_archive:
            self.archive()

    def flush(self, timeout: Optional[float] = None) -> bool:
        """
        Block until all work queued so far has completed.

        Returns:
            bool: False if the timeout expired first.
        """
        return self._executor.join(timeout)

    def close(self) -> None:
        """
        Drain pending work, release the file handle and stop the worker.

        The target stays registered with atexit until closed, which keeps it
        alive: a target dropped without close() (e.g. after
        LogrService.remove_target) holds its worker thread and file handle
        until interpreter exit. Whoever removes a target owns closing it.
        """
        if self._executor.closed:
            return
        self._executor.submit(self._close_file)
        self._executor.shutdown(wait=True)
        atexit.unregister(self.close)

    # -------------------------------------------------------------------------
    # ROTATION POLICY
    # -------------------------------------------------------------------------

    @property
    def should_archive(self) -> bool:
        age = self.log_file_age
        if age is None:
            return self.should_archive_based_on_size
        return age >= self.config.archive_frequency or self.should_archive_based_on_size

    @property
    def should_archive_based_on_size(self) -> bool:
        return self.log_file_size_in_bytes > self.config.max_file_size_in_bytes

    @property
    def log_file_age(self) -> Optional[TimeSpan]:
        """Age bucket of the active file; None if brand-new or not stat-able."""
        st = self._best_effort("stat", self.fs.stat, self.full_log_file_path)
        if st is None:
            return None
        return time_span_between(
            datetime.fromtimestamp(st.created),
            datetime.fromtimestamp(st.modified),
        )

    @property
    def log_file_size_in_bytes(self) -> int:
        st = self._best_effort("stat", self.fs.stat, self.full_log_file_path)
        return st.size if st is not None else 0

    @property
    def does_log_file_exist(self) -> bool:
        return bool(self._best_effort("exists", self.fs.file_exists, self.full_log_file_path, default=False))

    def archived_files(self) -> List[str]:
        """Archive paths of this target, newest (index 0) first."""
        entries = self._best_effort("list", self.fs.list_directory, self.archive_path, default=[])
        own = [p for p in entries if self._archive_index(p) is not None]
        return natural_sorted(own)

    # -------------------------------------------------------------------------
    # WORKER TASKS
    # -------------------------------------------------------------------------

    def _append(self, data: bytes) -> None:
        handle = self._handle
        if handle is None:
            return

        def _do_append() -> None:
            handle.seek_to_end()
            handle.write(data)
            handle.sync()

        self._best_effort("write", _do_append)

        if self.auto_archive and self.should_archive:
            # Rotate inline: queued writes that follow must land in the new file
            self._rotate()

    def _rotate(self) -> None:
        self._shift_archived_files()
        self._close_file()
        self._move_file()
        self._init_file()
        self._delete_obsolete_files()

    def _init_file(self) -> None:
        if not self.does_log_file_exist:
            self._best_effort("mkdir", self.fs.create_directory, os.path.dirname(self.full_log_file_path))
            self._best_effort("create", self.fs.create_file, self.full_log_file_path, time.time())
        self._handle = self._best_effort("open", self.fs.open_for_append, self.full_log_file_path)

    def _close_file(self) -> None:
        handle = self._handle
        self._handle = None
        if handle is None:
            return
        self._best_effort("sync", handle.sync)
        self._best_effort("close", handle.close)

    def _move_file(self) -> None:
        destination = os.path.join(self.archive_path, self.config.archive_file_name(0))
        self._best_effort("mkdir", self.fs.create_directory, self.archive_path)
        if self._best_effort("exists", self.fs.file_exists, destination, default=True):
            # Slot 0 was not freed by the shift; keep appending to the active file
            logger.debug(f"FileTarget: '{destination}' still occupied, rotation skipped.")
            return
        self._best_effort("move", self.fs.move, self.full_log_file_path, destination)

    def _shift_archived_files(self) -> None:
        """
        Renumber archives so that slot 0 is free and indices stay contiguous.

        The file at sorted position p is renamed to index p + 1. Moves towards
        lower indices (closing gaps) run first in ascending order, then moves
        towards higher indices run highest first, so no rename ever lands on
        a file that has not been moved yet.
        """
        files = self.archived_files()
        downward = []
        upward = []
        for position, path in enumerate(files):
            index = self._archive_index(path)
            target = position + 1
            if index is None or index == target:
                continue
            move = (path, os.path.join(self.archive_path, self.config.archive_file_name(target)))
            (downward if target < index else upward).append(move)

        for src, dst in downward + list(reversed(upward)):
            self._best_effort("move", self.fs.move, src, dst)

    def _delete_obsolete_files(self) -> None:
        obsolete = self.archived_files()[self.config.max_archived_files_count:]
        for path in obsolete:
            self._best_effort("delete", self.fs.delete, path)

    # -------------------------------------------------------------------------
    # PRIVATE HELPERS
    # -------------------------------------------------------------------------

    def _archive_index(self, path: str) -> Optional[int]:
        match = self._archive_name_re.match(os.path.basename(path))
        return int(match.group(1)) if match else None

    def _best_effort(self, action: str, fn: Callable[..., Any], *args: Any, default: Any = None) -> Any:
        """
        Run a filesystem operation, discarding OSError.

        ValueError is treated the same way: it is what a handle closed
        underneath us raises on write. Failures are reported on the
        diagnostic logger at DEBUG level and the default is returned; the
        caller carries on regardless.
        """
        try:
            return fn(*args)
        except (OSError, ValueError) as e:
            logger.debug(f"FileTarget: {action} failed for {self.full_log_file_path}: {e}")
            return default
