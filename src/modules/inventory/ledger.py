"""Stock ledger.

``StockLedger.adjust`` is the only code path that changes
``Item.available_stock``.  It mutates the in-memory instance and records
a ``StockAdjusted`` event; persisting the item is the caller's job,
inside the same unit of work as whatever triggered the adjustment.

Adjustments are not idempotent: two calls with ``delta=-4`` consume
eight units.  Callers invoke it exactly once per logical movement.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from modules.core.exceptions import InvalidData
from modules.inventory.events import StockAdjusted
from modules.inventory.exceptions import InsufficientStock

if TYPE_CHECKING:
    from modules.inventory.models import Item

logger = structlog.get_logger(__name__)


class StockLedger:
    def adjust(self, item: Item, delta: int) -> Item:
        """Apply *delta* (negative consumes, positive restocks).

        Raises:
            InsufficientStock: the result would be negative; *item* is
                left untouched.
            InvalidData: *delta* is not an integer.
        """
        if isinstance(delta, bool) or not isinstance(delta, int):
            raise InvalidData(f"Stock delta must be an integer, got {delta!r}.")

        previous = item.available_stock
        new_stock = previous + delta
        if new_stock < 0:
            logger.warning(
                "stock.insufficient",
                item_id=str(item.id),
                available=previous,
                requested=-delta,
            )
            raise InsufficientStock(item.id, previous, -delta)

        item.available_stock = new_stock
        item.add_domain_event(
            StockAdjusted(
                aggregate_id=item.id,
                delta=delta,
                previous_stock=previous,
                new_stock=new_stock,
            )
        )
        return item
