"""ObjectStore — observable holder of the cheap and expensive entities.

The store owns one entity of each kind and two periodic timers that
replace them. Every replacement goes through notify(), which rotates the
store's revision_id and publishes the store on a single EventStream.
Notification is deliberately coarse: consumers that only care about one
entity filter on their side (see tickstore.subscription).
"""

from __future__ import annotations

import logging
from typing import Callable

from tickstore._ids import new_id
from tickstore.entity import CheapObject, ExpensiveObject
from tickstore.stream import Disposer, EventStream
from tickstore.timers import IntervalHandle, SetInterval

logger = logging.getLogger("tickstore.store")

CHEAP_INTERVAL = 1.0
EXPENSIVE_INTERVAL = 10.0


class ObjectStore:
    """Observable store with two independently ticking entities."""

    def __init__(
        self,
        set_interval: SetInterval,
        *,
        cheap_interval: float = CHEAP_INTERVAL,
        expensive_interval: float = EXPENSIVE_INTERVAL,
    ) -> None:
        if cheap_interval <= 0 or expensive_interval <= 0:
            raise ValueError(
                f"intervals must be positive (cheap={cheap_interval!r}, "
                f"expensive={expensive_interval!r})"
            )
        self._set_interval = set_interval
        self._cheap_interval = cheap_interval
        self._expensive_interval = expensive_interval
        self._revision_id = new_id()
        self._cheap = CheapObject()
        self._expensive = ExpensiveObject()
        self._cheap_timer: IntervalHandle | None = None
        self._expensive_timer: IntervalHandle | None = None
        self._changes: EventStream[ObjectStore] = EventStream()

    # --- Read-only state ---

    @property
    def revision_id(self) -> str:
        return self._revision_id

    @property
    def cheap(self) -> CheapObject:
        return self._cheap

    @property
    def expensive(self) -> ExpensiveObject:
        return self._expensive

    @property
    def running(self) -> bool:
        return self._cheap_timer is not None

    @property
    def changes(self) -> EventStream[ObjectStore]:
        """The notification channel. Emits the store itself."""
        return self._changes

    # --- Lifecycle ---

    def start(self) -> None:
        """Begin replacing entities on their intervals. No-op if already running."""
        if self.running:
            logger.debug("start() ignored: timers already running")
            return
        self._cheap_timer = self._set_interval(self._cheap_interval, self._tick_cheap)
        self._expensive_timer = self._set_interval(self._expensive_interval, self._tick_expensive)
        logger.info(
            "Started timers: cheap every %ss, expensive every %ss",
            self._cheap_interval, self._expensive_interval,
        )

    def stop(self) -> None:
        """Cancel both timers and notify once, whether or not they were running."""
        was_running = self._cancel_timers()
        if was_running:
            logger.info("Stopped timers")
        self.notify()

    def dispose(self) -> None:
        """Cancel timers and drop every subscriber. No notification."""
        self._cancel_timers()
        self._changes.dispose()
        logger.info("Store disposed")

    # --- Notification ---

    def subscribe(self, listener: Callable[[ObjectStore], None]) -> Disposer:
        """Call listener(store) on every notification. Returns the unsubscriber."""
        return self._changes.subscribe(listener)

    def notify(self) -> None:
        """Rotate revision_id, then run every subscriber in registration order."""
        self._revision_id = new_id()
        self._changes.emit(self)

    # --- Internals ---

    def _tick_cheap(self) -> None:
        self._cheap = CheapObject()
        logger.debug("cheap -> %s", self._cheap.id)
        self.notify()

    def _tick_expensive(self) -> None:
        self._expensive = ExpensiveObject()
        logger.debug("expensive -> %s", self._expensive.id)
        self.notify()

    def _cancel_timers(self) -> bool:
        was_running = False
        for timer in (self._cheap_timer, self._expensive_timer):
            if timer is not None:
                timer.stop()
                was_running = True
        self._cheap_timer = None
        self._expensive_timer = None
        return was_running

    def __repr__(self) -> str:
        state = "running" if self.running else "stopped"
        return f"ObjectStore(revision={self._revision_id[:8]}, {state})"
