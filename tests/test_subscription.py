"""Tests for watch() and select()."""

import operator

from tickstore import ObjectStore, VirtualTimers, select, watch


def _started_store():
    timers = VirtualTimers()
    store = ObjectStore(timers.set_interval)
    store.start()
    return store, timers


class TestWatch:
    def test_fires_on_every_notification(self):
        store, timers = _started_store()
        log = []
        sub = watch(store, lambda s: log.append(s.revision_id))
        for _ in range(7):
            store.notify()
        assert len(log) == 7
        assert sub.fire_count == 7

    def test_fires_on_every_tick(self):
        store, timers = _started_store()
        sub = watch(store, lambda s: None)
        timers.advance(20)
        assert sub.fire_count == 22  # 20 cheap + 2 expensive

    def test_fire_immediately(self):
        store, _ = _started_store()
        log = []
        watch(store, log.append, fire_immediately=True)
        assert log == [store]

    def test_dispose(self):
        store, timers = _started_store()
        sub = watch(store, lambda s: None)
        timers.advance(3)
        sub.dispose()
        sub.dispose()  # idempotent
        timers.advance(3)
        assert sub.fire_count == 3
        assert sub.disposed


class TestSelect:
    def test_no_initial_fire(self):
        store, _ = _started_store()
        log = []
        sub = select(store, lambda s: s.cheap, log.append)
        assert log == []
        assert sub.last_value is store.cheap

    def test_fire_immediately(self):
        store, _ = _started_store()
        log = []
        select(store, lambda s: s.cheap, log.append, fire_immediately=True)
        assert log == [store.cheap]

    def test_cheap_selector_ignores_expensive_ticks(self):
        timers = VirtualTimers()
        store = ObjectStore(timers.set_interval, cheap_interval=7.0, expensive_interval=3.0)
        store.start()
        log = []
        select(store, lambda s: s.cheap, log.append)

        timers.advance(6)  # expensive ticks at 3 and 6 only
        assert log == []

        timers.advance(1)  # cheap tick at 7
        assert log == [store.cheap]

    def test_expensive_selector_ignores_cheap_ticks(self):
        store, timers = _started_store()
        log = []
        select(store, lambda s: s.expensive, log.append)

        timers.advance(9)
        assert log == []

        timers.advance(1)
        assert log == [store.expensive]

        timers.advance(9)
        assert len(log) == 1

    def test_counts_over_run(self):
        store, timers = _started_store()
        cheap = select(store, lambda s: s.cheap, lambda v: None)
        expensive = select(store, lambda s: s.expensive, lambda v: None)
        broad = watch(store, lambda s: None)
        timers.advance(30)
        assert cheap.fire_count == 30
        assert expensive.fire_count == 3
        assert broad.fire_count == 33

    def test_stop_notification_does_not_fire_select(self):
        store, timers = _started_store()
        log = []
        select(store, lambda s: s.cheap, log.append)
        store.stop()
        assert log == []

    def test_last_value_tracks_changes(self):
        store, timers = _started_store()
        sub = select(store, lambda s: s.cheap, lambda v: None)
        timers.advance(2)
        assert sub.last_value is store.cheap

    def test_custom_equals(self):
        """Whole-revision selection compares plain strings."""
        store, _ = _started_store()
        log = []
        select(store, lambda s: s.revision_id, log.append, equals=operator.eq)
        store.notify()
        store.notify()
        assert len(log) == 2
        assert log[-1] == store.revision_id

    def test_projection_recomputed_every_notification(self):
        store, _ = _started_store()
        calls = [0]

        def projection(s):
            calls[0] += 1
            return s.cheap

        select(store, projection, lambda v: None)
        assert calls[0] == 1  # seeded at registration
        store.notify()
        store.notify()
        assert calls[0] == 3

    def test_dispose(self):
        store, timers = _started_store()
        log = []
        sub = select(store, lambda s: s.cheap, log.append)
        timers.advance(1)
        sub.dispose()
        timers.advance(5)
        assert len(log) == 1

    def test_dispose_during_dispatch(self):
        """A subscriber disposing a later one stops it within the same pass."""
        store, _ = _started_store()
        log = []
        later = None

        def first(s):
            later.dispose()

        watch(store, first)
        later = watch(store, lambda s: log.append("later"))
        store.notify()
        assert log == []

    def test_dispose_detaches_from_store(self):
        store, timers = _started_store()
        subs = [select(store, lambda s: s.cheap, lambda v: None) for _ in range(3)]
        assert store.changes.subscriber_count == 3
        for sub in subs:
            sub.dispose()
        assert store.changes.subscriber_count == 0


class TestWhen:
    def test_vetoed_calls_not_counted(self):
        store, timers = _started_store()
        allowed = [False]
        log = []
        sub = select(store, lambda s: s.cheap, log.append, when=lambda: allowed[0])

        timers.advance(2)
        assert log == []
        assert sub.fire_count == 0
        assert sub.last_value is store.cheap  # cache still advances

        allowed[0] = True
        store.notify()  # cheap unchanged since last tick
        assert log == []
        timers.advance(1)
        assert log == [store.cheap]
        assert sub.fire_count == 1

    def test_watch_respects_when(self):
        store, _ = _started_store()
        sub = watch(store, lambda s: None, when=lambda: False)
        store.notify()
        assert sub.fire_count == 0
