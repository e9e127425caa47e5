"""Textual integration for tickstore.

Guard + NoMatches + thread-marshal are enforced here, not at callsites.
Textual coupling is isolated in this module; the store and subscription
layer stay framework-agnostic. _paused_apps has a single owner (this
module): an app id is present iff we are inside its pause() context.
"""

import threading
from contextlib import contextmanager

from textual.css.query import NoMatches

from tickstore.entity import same_entity
from tickstore.subscription import select as _select, watch as _watch

# Module-owned pause state, keyed by id(app) so multiple apps work in tests.
_paused_apps: set[int] = set()


@contextmanager
def pause(app):
    """Suspend guarded subscriptions during widget replacement."""
    key = id(app)
    _paused_apps.add(key)
    try:
        yield
    finally:
        _paused_apps.discard(key)


def is_safe(app) -> bool:
    """Is the widget tree in a queryable state?"""
    return app.is_running and id(app) not in _paused_apps


def _bridge(app, listener):
    _main = threading.get_ident()

    def _call(value):
        if threading.get_ident() != _main:
            app.call_from_thread(_safe, value)
        else:
            _safe(value)

    def _safe(value):
        try:
            listener(value)
        except NoMatches:
            pass

    return _call


def watch(app, store, listener, *, fire_immediately=False):
    """watch() that safely bridges to Textual widgets.

    Skips while the app is paused or not running, swallows NoMatches from
    widget queries, and marshals cross-thread calls via call_from_thread.
    Skipped calls do not count towards the subscription's fire_count.
    """
    return _watch(
        store,
        _bridge(app, listener),
        when=lambda: is_safe(app),
        fire_immediately=fire_immediately,
    )


def select(app, store, projection, listener, *, equals=same_entity, fire_immediately=False):
    """select() that safely bridges to Textual widgets.

    Same guards as watch(). The cached projection still advances while the
    listener is skipped, so a resumed widget only sees later changes.
    """
    return _select(
        store,
        projection,
        _bridge(app, listener),
        equals=equals,
        when=lambda: is_safe(app),
        fire_immediately=fire_immediately,
    )
