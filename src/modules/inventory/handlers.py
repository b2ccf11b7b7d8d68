"""Event handlers for inventory domain events."""

from __future__ import annotations

import structlog

from modules.inventory.events import StockAdjusted
from shared.domain.bus import IEventHandler

logger = structlog.get_logger(__name__)


class StockAdjustedHandler(IEventHandler[StockAdjusted]):
    def handle(self, event: StockAdjusted) -> None:
        log = logger.bind(item_id=str(event.aggregate_id))
        log.info(
            "stock.adjusted",
            delta=event.delta,
            previous_stock=event.previous_stock,
            new_stock=event.new_stock,
        )


stock_adjusted_handler = StockAdjustedHandler()
