from __future__ import annotations

"""
Integration tests for the rotation policy (size and age).

Ages are driven through a filesystem stub whose stat() reports chosen
creation and modification instants.
"""

import os
import time
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

import pytest

from logr.config import FileTargetConfig
from logr.infra.fs import FileStat, LocalFileSystem
from logr.levels import TimeSpan


class AgedFileSystem(LocalFileSystem):
    """Reports the real size but a configurable age."""

    def __init__(self, age: Optional[timedelta] = None) -> None:
        super().__init__()
        self.age = age

    def stat(self, path: str) -> FileStat:
        real = super().stat(path)
        if self.age is None:
            return real
        created = datetime(2024, 6, 10, 8, 0)
        modified = created + self.age
        return FileStat(size=real.size, created=created.timestamp(), modified=modified.timestamp())


def _fill(log_dir: Path, size: int) -> None:
    (log_dir / "file.log").write_bytes(b"x" * size)


def test_size_boundary_is_strict(make_target, log_dir: Path) -> None:
    target = make_target(FileTargetConfig(max_file_size_in_bytes=100))

    _fill(log_dir, 100)
    assert target.log_file_size_in_bytes == 100
    assert target.should_archive_based_on_size is False

    _fill(log_dir, 101)
    assert target.should_archive_based_on_size is True


def test_new_file_uses_size_only(make_target, log_dir: Path) -> None:
    target = make_target(FileTargetConfig(max_file_size_in_bytes=10))

    assert target.log_file_age is None
    assert target.should_archive is False

    _fill(log_dir, 11)
    assert target.should_archive is True


@pytest.mark.parametrize("age,expected", [
    (timedelta(seconds=30), None),
    (timedelta(minutes=5), TimeSpan.MINUTE),
    (timedelta(hours=2), TimeSpan.HOUR),
    (timedelta(days=3), TimeSpan.DAY),
    (timedelta(days=8), TimeSpan.WEEK),
    (timedelta(days=40), TimeSpan.MONTH),
])
def test_log_file_age_buckets(make_target, age: timedelta, expected) -> None:
    target = make_target(fs=AgedFileSystem(age))
    assert target.log_file_age is expected


@pytest.mark.parametrize("frequency,age,expected", [
    (TimeSpan.DAY, timedelta(hours=5), False),
    (TimeSpan.DAY, timedelta(days=1), True),
    (TimeSpan.DAY, timedelta(days=9), True),
    (TimeSpan.WEEK, timedelta(days=6), False),
    (TimeSpan.MINUTE, timedelta(minutes=1), True),
    (TimeSpan.MONTH, timedelta(days=20), False),
])
def test_age_against_frequency(make_target, frequency: TimeSpan, age: timedelta, expected: bool) -> None:
    target = make_target(
        FileTargetConfig(archive_frequency=frequency),
        fs=AgedFileSystem(age),
    )
    assert target.should_archive is expected


def test_young_file_still_rotates_on_size(make_target, log_dir: Path) -> None:
    target = make_target(
        FileTargetConfig(archive_frequency=TimeSpan.MONTH, max_file_size_in_bytes=10),
        fs=AgedFileSystem(timedelta(hours=1)),
    )
    _fill(log_dir, 50)
    assert target.should_archive is True


def test_archive_if_needed(make_target, make_message, log_dir: Path) -> None:
    target = make_target(FileTargetConfig(max_file_size_in_bytes=10, max_archived_files_count=3))

    target.archive_if_needed()
    target.flush()
    assert not (log_dir / "archive").exists()

    target.send(make_message("long enough to cross the limit"))
    target.flush()
    target.archive_if_needed()
    target.flush()

    assert (log_dir / "archive" / "file.0.log").exists()
    assert target.log_file_size_in_bytes == 0


def test_age_survives_reopening_by_a_new_target(make_target, log_dir: Path) -> None:
    make_target().close()
    active = log_dir / "file.log"

    if getattr(os.stat(active), "st_birthtime", None) is None:
        try:
            os.getxattr(str(active), "user.logr.created")
        except (AttributeError, OSError):
            pytest.skip("no persistent creation time on this filesystem")

    later = time.time() + 2 * 3600
    os.utime(active, (later, later))

    assert make_target().log_file_age is TimeSpan.HOUR
