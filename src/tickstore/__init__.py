"""tickstore: an observable store with selector-filtered subscriptions."""

from importlib.metadata import version as _version

__version__ = _version("tickstore")

from tickstore.entity import BaseObject, CheapObject, ExpensiveObject, same_entity
from tickstore.store import CHEAP_INTERVAL, EXPENSIVE_INTERVAL, ObjectStore
from tickstore.stream import EventStream
from tickstore.subscription import Subscription, select, watch
from tickstore.timers import AsyncioTimers, VirtualTimers
# textual bridge and app NOT auto-imported — import tickstore.textual / tickstore.app

__all__ = [
    "BaseObject",
    "CheapObject",
    "ExpensiveObject",
    "same_entity",
    "ObjectStore",
    "CHEAP_INTERVAL",
    "EXPENSIVE_INTERVAL",
    "EventStream",
    "Subscription",
    "select",
    "watch",
    "AsyncioTimers",
    "VirtualTimers",
]
