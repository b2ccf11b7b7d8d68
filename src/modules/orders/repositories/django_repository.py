"""Django ORM implementation of the Order repository.

Reads eager-load the status, the client and the lines so serializing an
order costs a fixed number of queries.  ``get_for_update`` locks only
the order row: ``FOR UPDATE`` cannot be combined with the outer join to
the nullable client on PostgreSQL.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db.models import Max

from modules.core.outbox import record_domain_events
from modules.core.repositories.django_repository import DjangoModelRepository
from modules.orders.models import Invoice, Order, OrderLine
from modules.orders.repositories.interfaces import IOrderRepository, LineSpec

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(DjangoModelRepository[Order], IOrderRepository):
    def __init__(self) -> None:
        super().__init__(Order)

    def _queryset(self):
        return Order.objects.select_related("status", "client").prefetch_related(
            "lines__item"
        )

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: Any) -> Optional[Order]:
        """Returns ``None`` for non-existent or invalid IDs."""
        try:
            return self._queryset().filter(pk=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """Supported filter keys are any ``Order`` lookups, typically
        ``status_id``, ``client_id`` and ``placed_at__range``."""
        queryset = self._queryset()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def lines_for_item(
        self, order: Order, item_id: Any, position: Optional[int] = None
    ) -> List[OrderLine]:
        try:
            queryset = OrderLine.objects.select_for_update().filter(
                order=order, item_id=item_id
            )
            if position is not None:
                queryset = queryset.filter(position=position)
            return list(queryset.order_by("position"))
        except (ValueError, ValidationError):
            return []

    def has_invoices(self, order: Order) -> bool:
        return Invoice.objects.filter(order=order).exists()

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def add_lines(self, order: Order, lines: Iterable[LineSpec]) -> List[OrderLine]:
        last = OrderLine.objects.filter(order=order).aggregate(last=Max("position"))
        position = last["last"] or 0

        created = []
        for item, quantity, unit_price in lines:
            position += 1
            created.append(
                OrderLine(
                    order=order,
                    item=item,
                    position=position,
                    quantity=quantity,
                    unit_price=unit_price,
                )
            )
        OrderLine.objects.bulk_create(created)
        logger.info("order.lines_added", order_id=str(order.id), line_count=len(created))
        return created

    def save_line(self, line: OrderLine) -> OrderLine:
        line.save(update_fields=["quantity", "unit_price"])
        logger.info(
            "order.line_saved",
            order_id=str(line.order_id),
            position=line.position,
        )
        return line

    def delete_line(self, line: OrderLine) -> None:
        order_id, position = line.order_id, line.position
        line.delete()
        logger.info("order.line_deleted", order_id=str(order_id), position=position)

    def save(self, entity: Order) -> Order:
        """Persist the order and write its pending events to the outbox."""
        entity.save()
        event_count = record_domain_events(entity, topic="orders")
        logger.info("order.saved", order_id=str(entity.id), event_count=event_count)
        return entity

    def delete(self, entity: Order) -> None:
        """Remove all lines, then the order itself."""
        order_id = entity.id
        record_domain_events(entity, topic="orders")
        line_count, _ = OrderLine.objects.filter(order=entity).delete()
        entity.delete()
        logger.info("order.deleted", order_id=str(order_id), line_count=line_count)
