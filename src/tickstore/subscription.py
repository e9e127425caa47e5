"""Subscriptions — broad (watch) and narrow (select) listeners on a store.

Two flavors:
- watch(store, listener): listener(store) runs on every notification.
- select(store, projection, listener): the projection is recomputed on every
  notification; listener(value) runs only when the projected value differs
  from the previous one according to ``equals``.

The store publishes on one channel; select() hangs a distinct() child off
that channel, so a consumer of store.cheap never wakes for an expensive tick.

Both accept ``when``, a predicate checked before each call. A call it
vetoes is not counted, but the cached value still advances.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

from tickstore.entity import same_entity
from tickstore.store import ObjectStore

T = TypeVar("T")


class Subscription(Generic[T]):
    """Disposable listener registration on an ObjectStore."""

    __slots__ = ("_unsubscribe", "_disposed", "_last_value", "_fire_count", "_when")

    def __init__(self, when: Callable[[], bool] | None = None) -> None:
        self._unsubscribe: Callable[[], None] | None = None
        self._disposed = False
        self._last_value: T | None = None
        self._fire_count = 0
        self._when = when

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def last_value(self) -> T | None:
        """The most recent value seen, whether or not the listener ran."""
        return self._last_value

    @property
    def fire_count(self) -> int:
        """How many times the listener has been called."""
        return self._fire_count

    def dispose(self) -> None:
        """Stop listening. Safe to call more than once."""
        self._disposed = True
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _fire(self, listener: Callable[[T], None], value: T) -> None:
        if self._disposed:
            return
        self._last_value = value
        if self._when is not None and not self._when():
            return
        self._fire_count += 1
        listener(value)

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else "active"
        return f"Subscription(fired={self._fire_count}, {state})"


def watch(
    store: ObjectStore,
    listener: Callable[[ObjectStore], None],
    *,
    when: Callable[[], bool] | None = None,
    fire_immediately: bool = False,
) -> Subscription[ObjectStore]:
    """Call listener(store) on every notification.

    Usage:
        sub = watch(store, lambda s: label.update(s.revision_id))
        ...
        sub.dispose()
    """
    sub: Subscription[ObjectStore] = Subscription(when)
    if fire_immediately:
        sub._fire(listener, store)
    else:
        sub._last_value = store
    sub._unsubscribe = store.subscribe(lambda s: sub._fire(listener, s))
    return sub


def select(
    store: ObjectStore,
    projection: Callable[[ObjectStore], T],
    listener: Callable[[T], None],
    *,
    equals: Callable[[Any, Any], bool] = same_entity,
    when: Callable[[], bool] | None = None,
    fire_immediately: bool = False,
) -> Subscription[T]:
    """Call listener(value) when projection(store) changes.

    The projection runs at registration to seed the cached value, then on
    every notification. ``equals(previous, current)`` decides whether a
    change happened; the default compares entities by id.

    Usage:
        sub = select(store, lambda s: s.cheap, lambda cheap: show(cheap))
        # expensive ticks never reach show()
    """
    sub: Subscription[T] = Subscription(when)
    initial = projection(store)
    if fire_immediately:
        sub._fire(listener, initial)
    else:
        sub._last_value = initial
    changed = store.changes.distinct(key=projection, equals=equals, initial=initial)
    changed.subscribe(lambda value: sub._fire(listener, value))
    sub._unsubscribe = changed.dispose
    return sub
