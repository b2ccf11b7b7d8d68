"""Domain events for the Orders bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from shared.domain.events import DomainEvent


@dataclass(frozen=True)
class OrderCreated(DomainEvent):
    """Raised when an order and its lines are committed."""

    line_count: int = 0
    total: Decimal = Decimal("0.00")


@dataclass(frozen=True)
class OrderHeaderUpdated(DomainEvent):
    """Raised when an order's status or client changes."""

    status_label: str = ""
    client_id: Optional[str] = None


@dataclass(frozen=True)
class OrderDeleted(DomainEvent):
    """Raised when an order and its lines are removed."""

    line_count: int = 0
