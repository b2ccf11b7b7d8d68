"""Domain events for the inventory bounded context."""

from __future__ import annotations

from dataclasses import dataclass

from shared.domain.events import DomainEvent


@dataclass(frozen=True)
class StockAdjusted(DomainEvent):
    """Raised every time the ledger changes an item's available stock."""

    delta: int = 0
    previous_stock: int = 0
    new_stock: int = 0
