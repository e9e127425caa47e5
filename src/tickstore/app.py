"""Textual demo app: three read-only displays and a start/stop control bar.

The widgets hold no state of their own beyond what they last rendered.
Each one registers a single subscription on mount and disposes it on
unmount. The store is injected; nothing looks it up globally.
"""

from __future__ import annotations

from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Footer, Header, Static

from tickstore import textual as stx
from tickstore.entity import BaseObject
from tickstore.store import CHEAP_INTERVAL, EXPENSIVE_INTERVAL, ObjectStore
from tickstore.subscription import Subscription


class EntityWidget(Static):
    """Shows one entity's last_updated. Re-renders only when that entity changes.

    Subclasses set HEADING and must override project() to pick the entity.
    """

    HEADING = ""

    def __init__(self, store: ObjectStore, *, id: str | None = None) -> None:
        super().__init__(id=id)
        self._store = store
        self._subscription: Subscription | None = None
        self.value: BaseObject | None = None
        self.render_count = 0

    @staticmethod
    def project(store: ObjectStore) -> BaseObject:
        raise NotImplementedError

    def on_mount(self) -> None:
        self.show_entity(self.project(self._store))
        self._subscription = stx.select(self.app, self._store, self.project, self.show_entity)

    def on_unmount(self) -> None:
        if self._subscription is not None:
            self._subscription.dispose()
            self._subscription = None

    def show_entity(self, entity: BaseObject) -> None:
        self.value = entity
        self.render_count += 1
        self.update(f"{self.HEADING}\nLast Updated\n{entity.last_updated}")


class CheapWidget(EntityWidget):
    HEADING = "Cheap Widget"

    @staticmethod
    def project(store: ObjectStore) -> BaseObject:
        return store.cheap


class ExpensiveWidget(EntityWidget):
    HEADING = "Expensive Widget"

    @staticmethod
    def project(store: ObjectStore) -> BaseObject:
        return store.expensive


class RevisionWidget(Static):
    """Shows the store's revision id. Re-renders on every notification."""

    def __init__(self, store: ObjectStore, *, id: str | None = None) -> None:
        super().__init__(id=id)
        self._store = store
        self._subscription: Subscription | None = None
        self.value: str | None = None
        self.render_count = 0

    def on_mount(self) -> None:
        self.show_revision(self._store)
        self._subscription = stx.watch(self.app, self._store, self.show_revision)

    def on_unmount(self) -> None:
        if self._subscription is not None:
            self._subscription.dispose()
            self._subscription = None

    def show_revision(self, store: ObjectStore) -> None:
        self.value = store.revision_id
        self.render_count += 1
        self.update(f"Store Revision\n{store.revision_id}")


class ControlBar(Horizontal):
    def compose(self) -> ComposeResult:
        yield Button("Start", id="start", variant="success")
        yield Button("Stop", id="stop", variant="error")


class TickApp(App):
    """Home page wiring the shared store into every display."""

    TITLE = "Home Page"

    CSS = """
    EntityWidget, RevisionWidget {
        height: 5;
        padding: 0 1;
        margin-bottom: 1;
    }
    CheapWidget {
        background: $warning 40%;
    }
    ExpensiveWidget {
        background: $primary 40%;
    }
    ControlBar {
        height: auto;
    }
    ControlBar Button {
        margin-right: 2;
    }
    """

    BINDINGS = [
        ("s", "start", "Start"),
        ("x", "stop", "Stop"),
        ("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        store: ObjectStore | None = None,
        *,
        autostart: bool = False,
        cheap_interval: float = CHEAP_INTERVAL,
        expensive_interval: float = EXPENSIVE_INTERVAL,
    ) -> None:
        super().__init__()
        if store is None:
            # Timers run on this app's own event loop.
            store = ObjectStore(
                self.set_interval,
                cheap_interval=cheap_interval,
                expensive_interval=expensive_interval,
            )
        self.store = store
        self._autostart = autostart

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical():
            yield CheapWidget(self.store, id="cheap")
            yield ExpensiveWidget(self.store, id="expensive")
            yield RevisionWidget(self.store, id="revision")
            yield ControlBar()
        yield Footer()

    def on_mount(self) -> None:
        if self._autostart:
            self.store.start()

    def on_unmount(self) -> None:
        self.store.dispose()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "start":
            self.action_start()
        elif event.button.id == "stop":
            self.action_stop()

    def action_start(self) -> None:
        self.store.start()

    def action_stop(self) -> None:
        self.store.stop()
