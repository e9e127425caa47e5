"""Periodic callback sources.

The store never talks to a clock directly. It is handed a ``set_interval``
callable with the same shape as Textual's ``App.set_interval``:

    handle = set_interval(1.0, callback)
    handle.stop()

Two implementations live here: VirtualTimers, a manually advanced clock
for tests and scripted runs, and AsyncioTimers, for a plain asyncio loop.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from typing import Callable, Protocol


class IntervalHandle(Protocol):
    def stop(self) -> None: ...


SetInterval = Callable[[float, Callable[[], None]], IntervalHandle]


def _check_interval(interval: float) -> None:
    if interval <= 0:
        raise ValueError(f"interval must be positive, got {interval!r}")


class _VirtualInterval:
    __slots__ = ("interval", "callback", "active")

    def __init__(self, interval: float, callback: Callable[[], None]) -> None:
        self.interval = interval
        self.callback = callback
        self.active = True

    def stop(self) -> None:
        self.active = False


class VirtualTimers:
    """Deterministic clock. Time only moves when advance() is called.

    Usage:
        timers = VirtualTimers()
        store = ObjectStore(timers.set_interval)
        store.start()
        timers.advance(10)  # ten cheap ticks, one expensive tick
    """

    def __init__(self) -> None:
        self._now = 0.0
        self._queue: list[tuple[float, int, _VirtualInterval]] = []
        self._seq = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    @property
    def active_count(self) -> int:
        return sum(1 for _, _, entry in self._queue if entry.active)

    def set_interval(self, interval: float, callback: Callable[[], None]) -> _VirtualInterval:
        _check_interval(interval)
        entry = _VirtualInterval(interval, callback)
        heapq.heappush(self._queue, (self._now + interval, next(self._seq), entry))
        return entry

    def advance(self, delta: float) -> None:
        """Move the clock forward, firing every callback that falls due.

        Callbacks run in due-time order; ``now`` reads as the due time while
        each one runs.
        """
        if delta < 0:
            raise ValueError(f"cannot move time backwards ({delta!r})")
        target = self._now + delta
        while self._queue and self._queue[0][0] <= target:
            due, _, entry = heapq.heappop(self._queue)
            if not entry.active:
                continue
            self._now = due
            entry.callback()
            if entry.active:
                heapq.heappush(self._queue, (due + entry.interval, next(self._seq), entry))
        self._now = target


class _AsyncioInterval:
    __slots__ = ("_loop", "_interval", "_callback", "_handle")

    def __init__(self, loop: asyncio.AbstractEventLoop, interval: float, callback: Callable[[], None]) -> None:
        self._loop = loop
        self._interval = interval
        self._callback = callback
        self._handle: asyncio.TimerHandle | None = loop.call_later(interval, self._fire)

    def _fire(self) -> None:
        # Re-arm first so the period does not drift by the callback's runtime.
        self._handle = self._loop.call_later(self._interval, self._fire)
        self._callback()

    def stop(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


class AsyncioTimers:
    """set_interval() on top of the running asyncio loop.

    Must be called from inside the loop (e.g. a coroutine or a callback).
    """

    def set_interval(self, interval: float, callback: Callable[[], None]) -> _AsyncioInterval:
        _check_interval(interval)
        return _AsyncioInterval(asyncio.get_running_loop(), interval, callback)
