"""Concurrency-limited work queue.

Usage example:
    from docpub.infrastructure.queue import ConcurrencyLimitedQueue

    with ConcurrencyLimitedQueue(max_concurrent=29) as queue:
        future = queue.submit(upload, path)
        future.result()
"""

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from types import TracebackType
from typing import Self

from ..config import MAX_CONCURRENT


class QueueSizeError(ValueError):
    """Raised when a queue is configured with fewer than one slot."""

    def __init__(self, max_concurrent: int) -> None:
        super().__init__(f"max_concurrent must be at least 1 (got {max_concurrent}).")


class ConcurrencyLimitedQueue:
    """Runs submitted tasks on at most `max_concurrent` worker threads.

    Tasks are admitted in FIFO order and each one keeps its slot until it
    returns or raises. Any number of tasks may be queued.
    """

    def __init__(self, max_concurrent: int = MAX_CONCURRENT) -> None:
        if max_concurrent < 1:
            raise QueueSizeError(max_concurrent)
        self.max_concurrent = max_concurrent
        self._executor = ThreadPoolExecutor(
            max_workers=max_concurrent,
            thread_name_prefix="docpub-dispatch",
        )

    def submit[T](self, task: Callable[..., T], *args: object) -> Future[T]:
        """Queue `task(*args)` and return a future for its result."""
        return self._executor.submit(task, *args)

    def close(self, *, wait: bool = True) -> None:
        """Stop accepting work; optionally block until admitted tasks finish."""
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
