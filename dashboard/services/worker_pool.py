"""
Bounded executor for blocking extraction work.

PDF parsing and image recognition block, so they run on a fixed set of worker
threads. The pool admits at most ``max_pending`` jobs (queued plus running);
submissions beyond that are rejected instead of growing an unbounded queue.
"""

from __future__ import annotations

import asyncio
import functools
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional, TypeVar

from dashboard.core.errors import WorkerPoolSaturatedError

T = TypeVar("T")

logger = logging.getLogger(__name__)


class WorkerPool:
    """Submit blocking callables and await their results from async code."""

    def __init__(self, *, max_workers: int = 2, max_pending: int = 8) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        if max_pending < max_workers:
            raise ValueError("max_pending must be at least max_workers")
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="document-worker"
        )
        self._max_pending = max_pending
        self._pending = 0
        self._lock = threading.Lock()

    @property
    def pending(self) -> int:
        with self._lock:
            return self._pending

    @property
    def max_pending(self) -> int:
        return self._max_pending

    async def submit(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Run ``func`` on a worker thread, rejecting when the pool is full.

        A slot is held until the job itself finishes. Cancelling the awaiting
        coroutine withdraws a job that has not started yet; a running job keeps
        its slot until it returns.
        """
        with self._lock:
            if self._pending >= self._max_pending:
                logger.warning("Worker pool saturated (%d pending jobs)", self._pending)
                raise WorkerPoolSaturatedError(
                    details=f"{self._pending} documents are already being processed."
                )
            self._pending += 1

        try:
            future = self._executor.submit(functools.partial(func, *args, **kwargs))
        except RuntimeError:
            self._release()
            raise
        future.add_done_callback(self._release)
        return await asyncio.wrap_future(future)

    def _release(self, _future: Optional[Future] = None) -> None:
        with self._lock:
            self._pending -= 1

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait, cancel_futures=True)


__all__ = ["WorkerPool"]
