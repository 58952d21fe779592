"""Task executors.

The SDK must only be called from one designated context, and host events
must be delivered in order on the host's context. Both are modelled as an
executor that runs submitted callables one at a time. Submitting never
blocks the caller and never returns a result.
"""

import logging
import queue
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

Task = Callable[[], Any]

_STOP = object()


def _run_task(executor_name: str, task: Task) -> None:
    try:
        task()
    except Exception:
        logger.exception("Task failed on %s executor", executor_name)


class Executor(ABC):
    """Runs submitted tasks one at a time, in submission order."""

    name: str = "executor"

    @abstractmethod
    def submit(self, task: Task) -> None:
        """
        Enqueue a task. Fire-and-forget.

        Args:
            task: Zero-argument callable
        """
        pass

    def wait_idle(self, timeout: Optional[float] = None) -> bool:
        """
        Wait until every submitted task has run.

        Returns:
            True if idle, False if the timeout expired first
        """
        return True

    def shutdown(self, timeout: float = 2.0) -> None:
        """Stop accepting tasks and release the worker, if any."""
        pass


class ImmediateExecutor(Executor):
    """Runs each task inline on the submitting thread."""

    def __init__(self, name: str = "immediate") -> None:
        self.name = name

    def submit(self, task: Task) -> None:
        _run_task(self.name, task)


class SerialExecutor(Executor):
    """Runs tasks on a single dedicated worker thread."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._queue: "queue.Queue[Any]" = queue.Queue()
        self._cond = threading.Condition()
        self._pending = 0
        self._stopped = False
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def submit(self, task: Task) -> None:
        with self._cond:
            if self._stopped:
                logger.debug("Executor %s is shut down; dropping task", self.name)
                return
            if self._thread is None:
                self._thread = threading.Thread(
                    target=self._worker, name=f"pollfish-{self.name}", daemon=True
                )
                self._thread.start()
            self._pending += 1
            # _STOP must never overtake a counted task
            self._queue.put(task)

    def _worker(self) -> None:
        while True:
            task = self._queue.get()
            if task is _STOP:
                return
            _run_task(self.name, task)
            with self._cond:
                self._pending -= 1
                self._cond.notify_all()

    def wait_idle(self, timeout: Optional[float] = None) -> bool:
        # Must not be called from the worker itself.
        with self._cond:
            return self._cond.wait_for(lambda: self._pending == 0, timeout)

    def shutdown(self, timeout: float = 2.0) -> None:
        with self._cond:
            if self._stopped:
                return
            self._stopped = True
            thread = self._thread
            if thread is None:
                return
            self._queue.put(_STOP)

        if thread is not threading.current_thread():
            thread.join(timeout=timeout)
            if thread.is_alive():
                logger.warning("Executor %s did not stop within %.1fs", self.name, timeout)
