"""Domain event primitives shared by every module."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List
from uuid import UUID, uuid4


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DomainEvent:
    """Immutable fact raised by an aggregate.

    ``event_name`` is the concrete class name and doubles as the outbox
    ``event_type``.
    """

    aggregate_id: UUID
    event_id: UUID = field(default_factory=uuid4)
    occurred_on: datetime = field(default_factory=_utcnow)
    event_name: str = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "event_name", type(self).__name__)


class DomainEventMixin:
    """Lets a Django model queue events until its repository saves it.

    The queue lives on the instance only; a reloaded aggregate starts
    empty.
    """

    def _pending_events(self) -> List[DomainEvent]:
        pending = self.__dict__.get("_domain_events")
        if pending is None:
            pending = self.__dict__["_domain_events"] = []
        return pending

    def add_domain_event(self, event: DomainEvent) -> None:
        self._pending_events().append(event)

    def clear_domain_events(self) -> None:
        self._pending_events().clear()

    @property
    def domain_events(self) -> List[DomainEvent]:
        return list(self._pending_events())
