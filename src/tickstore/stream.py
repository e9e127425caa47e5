"""Push-based event stream with operator chaining.

Single-topic channel: emit values and subscribe to them. distinct()
derives a child stream that only carries changed values; dispose() tears
down the entire chain and unhooks it from its parent.

Delivery is synchronous and in subscription order.
"""

from __future__ import annotations

import operator
from typing import Callable, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")

Disposer = Callable[[], None]

_UNSET = object()


class EventStream(Generic[T]):
    """Push-based event stream with operator chaining."""

    def __init__(self) -> None:
        self._subscribers: list[Callable[[T], None]] = []
        self._children: list[EventStream] = []  # downstream streams for dispose
        self._disposed = False
        self._parent_disposer: Disposer | None = None

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def emit(self, value: T) -> None:
        """Push a value to all subscribers, in the order they subscribed."""
        if self._disposed:
            return
        # Snapshot: callbacks may unsubscribe during dispatch.
        for cb in list(self._subscribers):
            cb(value)

    def subscribe(self, callback: Callable[[T], None]) -> Disposer:
        """Register a callback. Returns a function that removes it."""
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            try:
                self._subscribers.remove(callback)
            except ValueError:
                pass  # already removed

        return _unsubscribe

    def distinct(
        self,
        key: Callable[[T], U] | None = None,
        equals: Callable[[U, U], bool] = operator.eq,
        *,
        initial: object = _UNSET,
    ) -> EventStream[U]:
        """Drop events whose key equals the previous one.

        The child stream carries key(value) (or the value itself when no key
        is given). Without ``initial`` the first event always passes; with
        it, the first event is compared against ``initial``.
        """
        child: EventStream[U] = EventStream()
        last: list[object] = [initial]

        def _on_event(value: T) -> None:
            current = key(value) if key is not None else value
            if last[0] is not _UNSET and equals(last[0], current):
                return
            last[0] = current
            child.emit(current)

        self._attach(child, _on_event)
        return child

    def dispose(self) -> None:
        """Tear down this stream and all downstream children."""
        self._disposed = True
        self._subscribers.clear()
        for child in list(self._children):
            child.dispose()
        self._children.clear()
        if self._parent_disposer is not None:
            self._parent_disposer()
            self._parent_disposer = None

    def _attach(self, child: EventStream, forward: Callable[[T], None]) -> None:
        """Feed child from this stream. Disposing child detaches it completely."""
        self._children.append(child)
        unsubscribe = self.subscribe(forward)

        def _detach() -> None:
            unsubscribe()
            try:
                self._children.remove(child)
            except ValueError:
                pass

        child._parent_disposer = _detach
