"""Delayed-task schedulers that stand in for backend latency."""

from __future__ import annotations

import asyncio
import heapq
import itertools
from typing import Any, Callable, Protocol, TypeVar

T = TypeVar("T")


class Scheduler(Protocol):
    def after(self, delay: float, fn: Callable[[], T]) -> asyncio.Future[T]:
        """Run ``fn`` once ``delay`` seconds have elapsed and resolve with its outcome."""
        ...


def _settle(future: asyncio.Future[Any], fn: Callable[[], Any]) -> None:
    # fn runs even if the caller cancelled the future; its effect must still land.
    try:
        result = fn()
    except Exception as exc:
        if not future.done():
            future.set_exception(exc)
        return
    if not future.done():
        future.set_result(result)


def rejected(exc: Exception) -> asyncio.Future[Any]:
    """Return an already-failed future on the running loop."""
    future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
    future.set_exception(exc)
    return future


class AsyncioScheduler:
    """Wall-clock scheduler on the running asyncio loop.

    ``scale`` multiplies every delay; ``scale=0`` completes tasks on the next
    loop iterations in the order they were scheduled.
    """

    def __init__(self, scale: float = 1.0) -> None:
        if scale < 0:
            raise ValueError("scale must be non-negative")
        self.scale = scale

    def after(self, delay: float, fn: Callable[[], T]) -> asyncio.Future[T]:
        loop = asyncio.get_running_loop()
        future: asyncio.Future[T] = loop.create_future()
        scaled = delay * self.scale
        if scaled <= 0:
            loop.call_soon(_settle, future, fn)
        else:
            loop.call_later(scaled, _settle, future, fn)
        return future


class ManualScheduler:
    """Virtual-clock scheduler for tests.

    Nothing fires until ``advance`` or ``run_all`` is called. Tasks fire in
    order of due time, ties broken by scheduling order.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._pending: list[tuple[float, int, asyncio.Future[Any], Callable[[], Any]]] = []
        self._sequence = itertools.count()

    def after(self, delay: float, fn: Callable[[], T]) -> asyncio.Future[T]:
        future: asyncio.Future[T] = asyncio.get_running_loop().create_future()
        heapq.heappush(self._pending, (self.now + delay, next(self._sequence), future, fn))
        return future

    @property
    def pending(self) -> int:
        return len(self._pending)

    def advance(self, seconds: float) -> int:
        """Move the clock forward and fire everything now due. Returns the number fired."""
        target = self.now + seconds
        fired = 0
        while self._pending and self._pending[0][0] <= target:
            due, _, future, fn = heapq.heappop(self._pending)
            self.now = due
            _settle(future, fn)
            fired += 1
        self.now = target
        return fired

    def run_all(self) -> int:
        if not self._pending:
            return 0
        return self.advance(max(due for due, *_ in self._pending) - self.now)
