from __future__ import annotations

"""
Integration tests for the file target write path.

Verifies:
1. Active file creation at construction.
2. Level filtering and blank line suppression.
3. Ordered, newline-terminated appends.
4. Lifecycle (flush/close) and tolerance to filesystem failures.
"""

import threading
from pathlib import Path
from unittest.mock import patch

from logr.config import FileTargetConfig
from logr.infra.fs import LocalFileSystem
from logr.levels import LogLevel, Style


def test_construction_creates_directory_and_empty_file(make_target, log_dir: Path) -> None:
    target = make_target()

    active = log_dir / "file.log"
    assert active.exists()
    assert active.read_bytes() == b""
    assert target.full_log_file_path == str(active)
    assert target.archive_path == str(log_dir / "archive")


def test_existing_file_is_appended_not_truncated(make_target, make_message, log_dir: Path) -> None:
    log_dir.mkdir()
    (log_dir / "file.log").write_bytes(b"Info: earlier\n")

    target = make_target()
    target.send(make_message("later"))
    target.flush()

    assert (log_dir / "file.log").read_text(encoding="utf-8") == "Info: earlier\nInfo: later\n"


def test_disabled_levels_write_nothing(make_target, make_message, log_dir: Path) -> None:
    target = make_target(FileTargetConfig(levels=[LogLevel.ERROR, LogLevel.CRITICAL]))

    for level in (LogLevel.DEBUG, LogLevel.INFO, LogLevel.WARN):
        target.send(make_message("ignored", level))
    target.flush()

    assert (log_dir / "file.log").stat().st_size == 0


def test_level_filter_is_membership_not_threshold(make_target, make_message, log_dir: Path) -> None:
    target = make_target(FileTargetConfig(levels=[LogLevel.DEBUG, LogLevel.ERROR]))

    for level in LogLevel:
        target.send(make_message(level.name, level))
    target.flush()

    assert (log_dir / "file.log").read_text(encoding="utf-8") == "Debug: DEBUG\nError: ERROR\n"


def test_blank_lines_write_nothing(make_target, log_dir: Path) -> None:
    target = make_target()

    target.write("")
    target.write("  \n\t \n")
    target.flush()

    assert (log_dir / "file.log").stat().st_size == 0


def test_messages_are_appended_in_order(make_target, make_message, log_dir: Path) -> None:
    target = make_target()

    for i in range(100):
        target.send(make_message(f"line {i}"))
    target.flush()

    lines = (log_dir / "file.log").read_text(encoding="utf-8").splitlines(keepends=True)
    assert lines == [f"Info: line {i}\n" for i in range(100)]


def test_verbose_style_and_utf8(make_target, make_message, log_dir: Path) -> None:
    target = make_target(FileTargetConfig(style=Style.VERBOSE))

    target.send(make_message("naïve ☃", LogLevel.WARN))
    target.flush()

    data = (log_dir / "file.log").read_bytes()
    assert data == "[service.py:42] handle Warn: naïve ☃\n".encode("utf-8")


def test_concurrent_senders_produce_whole_lines(make_target, make_message, log_dir: Path) -> None:
    target = make_target()

    def worker(n: int) -> None:
        for i in range(50):
            target.send(make_message(f"t{n}-{i}"))

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    target.flush()

    lines = (log_dir / "file.log").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 200
    for n in range(4):
        own = [line for line in lines if line.startswith(f"Info: t{n}-")]
        assert own == [f"Info: t{n}-{i}" for i in range(50)]


def test_send_after_close_is_ignored(make_target, make_message, log_dir: Path) -> None:
    target = make_target()
    target.send(make_message("kept"))
    target.close()

    target.send(make_message("dropped"))
    target.archive()
    target.close()

    assert (log_dir / "file.log").read_text(encoding="utf-8") == "Info: kept\n"


def test_close_releases_exit_registration(make_target) -> None:
    target = make_target()

    with patch("logr.targets.file.atexit.unregister") as unregister:
        target.close()
        target.close()

    unregister.assert_called_once_with(target.close)


class UnopenableFileSystem(LocalFileSystem):
    def open_for_append(self, path: str):
        raise PermissionError("read-only volume")


def test_open_failure_is_swallowed(make_target, make_message, log_dir: Path) -> None:
    target = make_target(fs=UnopenableFileSystem())

    target.send(make_message("nowhere to go"))
    target.archive()
    assert target.flush(timeout=5) is True

    assert (log_dir / "file.log").read_bytes() == b""


def test_uncreatable_directory_is_swallowed(tmp_path: Path, make_target, make_message) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")

    target = make_target(base_dir=str(blocker / "logs"))
    target.send(make_message("lost"))

    assert target.flush(timeout=5) is True
    assert target.log_file_size_in_bytes == 0
    assert target.log_file_age is None
    assert target.should_archive is False


def test_flush_returns_while_other_threads_keep_sending(make_target, make_message, log_dir: Path) -> None:
    target = make_target()
    target.send(make_message("first"))
    stop = threading.Event()
    flushed = threading.Event()

    def sender() -> None:
        while not stop.is_set():
            target.send(make_message("x"))

    def flusher() -> None:
        target.flush()
        flushed.set()

    feeder = threading.Thread(target=sender, daemon=True)
    feeder.start()
    threading.Thread(target=flusher, daemon=True).start()
    try:
        assert flushed.wait(5), "flush() did not return while another thread kept sending"
    finally:
        stop.set()
        feeder.join()

    target.flush()
    assert (log_dir / "file.log").read_text(encoding="utf-8").startswith("Info: first\n")
