from __future__ import annotations

"""
Serial Background Executor.

A single daemon thread draining a FIFO queue. Work items run one at a time,
in submission order, which lets a target own mutable state (an open file
handle) without any lock: only the worker thread ever touches it.
"""

import logging
import queue
import threading
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

Task = Callable[[], Any]

# Sentinel that tells the worker loop to exit
_STOP = object()


class SerialExecutor:
    """
    Single-worker FIFO task queue.

    Tasks never raise into the worker loop: an exception is reported on the
    diagnostic logger and the next task runs. There is no cancellation; once
    submitted, a task always runs unless the executor has been shut down.
    """

    def __init__(self, name: str = "logr-worker") -> None:
        self._queue: queue.Queue[Any] = queue.Queue()
        self._closed = False
        self._state_lock = threading.Lock()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)
        self._thread.start()

    @property
    def closed(self) -> bool:
        return self._closed

    def submit(self, task: Task) -> bool:
        """
        Enqueue a task without waiting for it.

        Returns:
            bool: False if the executor is already shut down.
        """
        with self._state_lock:
            if self._closed:
                return False
            self._queue.put(task)
            return True

    def is_worker_thread(self) -> bool:
        return threading.current_thread() is self._thread

    def join(self, timeout: Optional[float] = None) -> bool:
        """
        Block until every task submitted so far has run.

        Must not be called from the worker thread itself.

        Args:
            timeout: Maximum seconds to wait; None waits indefinitely.

        Tasks submitted by other threads after this call are not waited for.

        Returns:
            bool: True if the earlier tasks ran before the timeout.
        """
        if self.is_worker_thread():
            raise RuntimeError("join() called from the worker thread would deadlock.")

        # Marker task: it runs once everything queued ahead of it has run
        done = threading.Event()
        with self._state_lock:
            closed = self._closed
            if not closed:
                self._queue.put(done.set)
        if closed:
            # Remaining tasks run before the stop sentinel
            self._thread.join(timeout)
            return not self._thread.is_alive()
        return done.wait(timeout)

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting tasks; pending tasks still run before the worker exits."""
        with self._state_lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put(_STOP)
        if wait and not self.is_worker_thread():
            self._thread.join()

    def _run(self) -> None:
        while True:
            task = self._queue.get()
            try:
                if task is _STOP:
                    return
                task()
            except Exception as e:
                logger.debug(f"SerialExecutor: Task {task!r} failed: {e}", exc_info=True)
            finally:
                self._queue.task_done()
