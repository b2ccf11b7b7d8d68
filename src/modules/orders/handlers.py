"""Event handlers for Orders domain events."""

from __future__ import annotations

import structlog

from modules.orders.events import OrderCreated, OrderDeleted, OrderHeaderUpdated
from shared.domain.bus import IEventHandler

logger = structlog.get_logger(__name__)


class OrderCreatedHandler(IEventHandler[OrderCreated]):
    def handle(self, event: OrderCreated) -> None:
        logger.info(
            "order.event.created",
            order_id=str(event.aggregate_id),
            line_count=event.line_count,
            total=str(event.total),
        )


class OrderHeaderUpdatedHandler(IEventHandler[OrderHeaderUpdated]):
    def handle(self, event: OrderHeaderUpdated) -> None:
        logger.info(
            "order.event.header_updated",
            order_id=str(event.aggregate_id),
            status=event.status_label,
            client_id=event.client_id,
        )


class OrderDeletedHandler(IEventHandler[OrderDeleted]):
    def handle(self, event: OrderDeleted) -> None:
        logger.info(
            "order.event.deleted",
            order_id=str(event.aggregate_id),
            line_count=event.line_count,
        )


order_created_handler = OrderCreatedHandler()
order_header_updated_handler = OrderHeaderUpdatedHandler()
order_deleted_handler = OrderDeletedHandler()
