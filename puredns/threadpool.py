"""A fixed pool of worker threads fed from a bounded task queue."""

from __future__ import annotations

import queue
import threading
from typing import Any

_STOP = object()


class ThreadPool:
    """Runs tasks in parallel on a fixed number of worker threads.

    A task is either a callable taking no arguments or an object with a
    ``run()`` method. When the queue is full, ``execute`` blocks until a
    worker takes a task off it.
    """

    def __init__(self, threads: int, queue_size: int) -> None:
        self._tasks: queue.Queue[Any] = queue.Queue(maxsize=max(queue_size, 1))
        self._cond = threading.Condition()
        self._submitted = 0
        self._completed = 0
        self._closed = False
        self._workers = [
            threading.Thread(target=self._work, daemon=True) for _ in range(threads)
        ]
        for worker in self._workers:
            worker.start()

    def __enter__(self) -> ThreadPool:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def execute(self, task: Any) -> None:
        """Queue a task for a worker, blocking while the queue is full."""
        if self._closed:
            raise RuntimeError("thread pool is closed")
        with self._cond:
            self._submitted += 1
        self._tasks.put(task)

    def done(self) -> bool:
        """Return True when no task is in flight."""
        with self._cond:
            return self._submitted == self._completed

    def wait(self) -> None:
        """Block until every queued task has been processed."""
        with self._cond:
            self._cond.wait_for(lambda: self._submitted == self._completed)

    def close(self) -> None:
        """Wait for the tasks in flight, then stop the worker threads."""
        if self._closed:
            return
        self.wait()
        self._closed = True
        for _ in self._workers:
            self._tasks.put(_STOP)
        for worker in self._workers:
            worker.join()

    def current_count(self) -> int:
        """Return the number of tasks processed so far."""
        with self._cond:
            return self._completed

    def _work(self) -> None:
        while True:
            task = self._tasks.get()
            if task is _STOP:
                return
            try:
                getattr(task, "run", task)()
            finally:
                with self._cond:
                    self._completed += 1
                    self._cond.notify_all()