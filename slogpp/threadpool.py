"""A resizable pool of worker threads running queued jobs."""

from __future__ import annotations

import threading
import traceback
from collections import deque
from functools import partial
from typing import Any, Callable, Deque, List


class ThreadPool:
    """Runs queued jobs on worker threads; with no threads, jobs run at once in the caller."""

    def __init__(self, size: int = 0) -> None:
        self._condition = threading.Condition()
        self._resize_lock = threading.Lock()
        self._threads: List[threading.Thread] = []
        self._wanted_size = 0
        self._jobs: Deque[Callable[[], Any]] = deque()
        if size:
            self.set_size(size)

    def __enter__(self) -> ThreadPool:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    def queue(self, function: Callable[..., Any], *args: Any) -> None:
        """Run ``function(*args)`` on a worker, or right away if the pool has no threads."""
        with self._condition:
            if self._threads:
                self._jobs.append(partial(function, *args))
                self._condition.notify()
                return
        function(*args)

    def set_size(self, size: int) -> None:
        """Grow or shrink the pool to ``size`` worker threads."""
        if size < 0:
            raise ValueError(f"thread pool size cannot be negative, got {size}")
        with self._resize_lock:
            with self._condition:
                self._wanted_size = size
                self._condition.notify_all()
                leaving = self._threads[size:]
                del self._threads[size:]
            for thread in reversed(leaving):
                thread.join()

            with self._condition:
                while len(self._threads) < size:
                    ident = len(self._threads)
                    thread = threading.Thread(
                        target=self._work, args=(ident,), name=f"slogpp-worker-{ident}", daemon=True
                    )
                    self._threads.append(thread)
                    thread.start()
                pending: List[Callable[[], Any]] = []
                if not self._threads:
                    pending = list(self._jobs)
                    self._jobs.clear()
            for job in pending:
                self._run(job)

    def shutdown(self) -> None:
        """Stop every worker, running any job still waiting in the caller."""
        self.set_size(0)

    def _should_quit(self, ident: int) -> bool:
        return ident >= self._wanted_size

    def _work(self, ident: int) -> None:
        while True:
            with self._condition:
                self._condition.wait_for(lambda: self._should_quit(ident) or bool(self._jobs))
                if self._should_quit(ident):
                    return
                job = self._jobs.popleft()
            self._run(job)

    @staticmethod
    def _run(job: Callable[[], Any]) -> None:
        try:
            job()
        except Exception:
            traceback.print_exc()