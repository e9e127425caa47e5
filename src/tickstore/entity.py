"""Timestamped entities held by the store.

An entity is an immutable (id, last_updated) pair. Equality is by id only:
two entities minted a microsecond apart are different, and a timestamp
collision never makes them equal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from tickstore._ids import new_id


def _now() -> str:
    return datetime.now().isoformat()


@dataclass(frozen=True, eq=False)
class BaseObject:
    """Immutable value with a unique id and the time it was created."""

    id: str = field(default_factory=new_id)
    last_updated: str = field(default_factory=_now)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BaseObject):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


@dataclass(frozen=True, eq=False)
class CheapObject(BaseObject):
    """Refreshed on the short interval."""


@dataclass(frozen=True, eq=False)
class ExpensiveObject(BaseObject):
    """Refreshed on the long interval."""


def same_entity(a: BaseObject, b: BaseObject) -> bool:
    """Comparator for select(): same id means same entity."""
    return a.id == b.id
