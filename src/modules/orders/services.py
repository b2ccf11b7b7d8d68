"""Order service layer (Use Cases).

Orchestrates the Order aggregate: header, ordered lines and the stock
they consume.  Every public command runs inside the injected unit of
work, so all loads, row locks and writes of one call commit together.

Business rules enforced:
- An order has at least one line; every line has ``quantity >= 1`` and
  ``unit_price > 0``.
- The status must exist and belong to the ORDER category.
- Creation is two-pass: every line is validated against the stock seen
  at lock time, then the ledger consumes stock line by line.  Nothing
  is written unless every line passes.
- Item rows are locked (``SELECT FOR UPDATE``) in primary-key order
  and held until commit.
- Updating a line never reconciles stock; removing a line gives its
  quantity back to the item through the ledger.
- Deleting an order is refused once an invoice exists, and does not
  give stock back.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.utils import timezone

from modules.core.constants import EntityKind
from modules.core.exceptions import IllegalOperation, NotFound
from modules.inventory.exceptions import InsufficientStock
from modules.inventory.ledger import StockLedger
from modules.orders.events import OrderCreated, OrderDeleted, OrderHeaderUpdated
from modules.orders.exceptions import InvalidOrder
from modules.orders.models import Order
from modules.statuses.models import StatusCategory
from modules.statuses.services import is_terminal_order_status

if TYPE_CHECKING:
    from modules.clients.models import InternalClient
    from modules.core.unit_of_work import DjangoUnitOfWork
    from modules.orders.dtos import (
        CreateOrderDTO,
        OrderLineDTO,
        UpdateOrderHeaderDTO,
        UpdateOrderLineDTO,
    )
    from modules.orders.models import OrderLine
    from modules.statuses.models import StatusValue

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives the unit of work (and optionally the ledger) via
    constructor injection.
    """

    def __init__(
        self,
        uow: DjangoUnitOfWork,
        ledger: Optional[StockLedger] = None,
    ) -> None:
        self._uow = uow
        self._ledger = ledger or StockLedger()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_order(self, dto: CreateOrderDTO) -> Order:
        """Create an order and consume stock for each of its lines.

        Steps:
        1. Reject an empty line list.
        2. Resolve the status (ORDER category) and the optional client.
        3. Lock every referenced item, in primary-key order.
        4. Pass 1: for each line in request order check quantity and
           price, item existence and ``available_stock >= quantity``.
        5. Pass 2: ``StockLedger.adjust(item, -quantity)`` per line.
        6. Persist header, lines and adjusted items.

        Lines for the same item are not merged.  Each is checked against
        the stock read at lock time, then each consumes on its own, so
        two lines of 4 on an item holding 10 leave 2.  If the lines
        jointly exceed the stock the ledger refuses the later one and
        the whole order rolls back.

        Raises:
            InvalidOrder: no lines, bad quantity/price, or a status
                outside the ORDER category.
            NotFound: status, client or an item does not exist.
            InsufficientStock: an item cannot cover its line.
        """
        log = logger.bind(
            status_id=str(dto.status_id),
            client_id=str(dto.client_id) if dto.client_id else None,
            line_count=len(dto.lines),
        )
        log.info("order.creation_started")

        with self._uow:
            if not dto.lines:
                raise InvalidOrder("at least one line required")

            status = self._require_order_status(dto.status_id)
            client = self._resolve_client(dto.client_id)

            items = self._uow.items.lock_many(line.item_id for line in dto.lines)

            # Pass 1: validate every line, mutate nothing.
            for index, line in enumerate(dto.lines, start=1):
                self._validate_line_values(line.quantity, line.unit_price, index)
                item = items.get(str(line.item_id))
                if item is None:
                    raise NotFound(EntityKind.ITEM, line.item_id)
                if item.available_stock < line.quantity:
                    log.warning(
                        "order.insufficient_stock",
                        item_id=str(item.id),
                        available=item.available_stock,
                        requested=line.quantity,
                    )
                    raise InsufficientStock(item.id, item.available_stock, line.quantity)

            # Pass 2: consume stock.
            for line in dto.lines:
                self._ledger.adjust(items[str(line.item_id)], -line.quantity)

            now = timezone.now()
            order = Order(
                status=status,
                client=client,
                placed_at=now,
                closed_at=now if is_terminal_order_status(status) else None,
                notes=dto.notes,
            )
            total = sum(
                (line.quantity * line.unit_price for line in dto.lines), Decimal("0.00")
            )
            order.add_domain_event(
                OrderCreated(aggregate_id=order.id, line_count=len(dto.lines), total=total)
            )
            self._uow.orders.save(order)
            self._uow.orders.add_lines(
                order,
                [
                    (items[str(line.item_id)], line.quantity, line.unit_price)
                    for line in dto.lines
                ],
            )
            for item in items.values():
                self._uow.items.save(item)

            log.info("order.created", order_id=str(order.id), total=str(total))
            return self._uow.orders.get_by_id(order.id) or order

    def update_header(self, order_id: Any, dto: UpdateOrderHeaderDTO) -> Order:
        """Replace the order's status and client.

        ``closed_at`` follows the status: stamped when it becomes
        terminal, cleared when it stops being terminal.

        Raises:
            NotFound: order, status or client does not exist.
            InvalidOrder: the status is not an ORDER status.
        """
        with self._uow:
            order = self._lock_order(order_id)
            status = self._require_order_status(dto.status_id)
            client = self._resolve_client(dto.client_id)

            log = logger.bind(
                order_id=str(order.id),
                old_status=str(order.status_id),
                new_status=str(status.id),
            )

            order.status = status
            order.client = client
            if is_terminal_order_status(status):
                order.closed_at = order.closed_at or timezone.now()
            else:
                order.closed_at = None

            order.add_domain_event(
                OrderHeaderUpdated(
                    aggregate_id=order.id,
                    status_label=status.label,
                    client_id=str(client.id) if client else None,
                )
            )
            self._uow.orders.save(order)
            log.info("order.header_updated", closed=order.closed_at is not None)
            return self._uow.orders.get_by_id(order.id) or order

    def add_line(self, order_id: Any, line: OrderLineDTO) -> OrderLine:
        """Append one line and consume its stock.

        Raises:
            NotFound: order or item does not exist.
            InvalidOrder: bad quantity or price.
            InsufficientStock: the item cannot cover the quantity.
        """
        with self._uow:
            order = self._lock_order(order_id)
            self._validate_line_values(line.quantity, line.unit_price)

            item = self._uow.items.lock_many([line.item_id]).get(str(line.item_id))
            if item is None:
                raise NotFound(EntityKind.ITEM, line.item_id)

            self._ledger.adjust(item, -line.quantity)
            self._uow.items.save(item)
            (created,) = self._uow.orders.add_lines(
                order, [(item, line.quantity, line.unit_price)]
            )
            logger.info(
                "order.line_added",
                order_id=str(order.id),
                item_id=str(item.id),
                position=created.position,
            )
            return created

    def update_line(
        self, order_id: Any, item_id: Any, dto: UpdateOrderLineDTO
    ) -> OrderLine:
        """Change quantity and/or price of one line.

        Stock is not reconciled.  When *item_id* appears on
        several lines, ``dto.position`` must pick one.

        Raises:
            NotFound: order or line does not exist.
            InvalidOrder: bad quantity/price or ambiguous line.
        """
        with self._uow:
            order = self._lock_order(order_id)
            line = self._single_line(order, item_id, dto.position)
            quantity = line.quantity if dto.quantity is None else dto.quantity
            unit_price = line.unit_price if dto.unit_price is None else dto.unit_price
            self._validate_line_values(quantity, unit_price, line.position)

            line.quantity = quantity
            line.unit_price = unit_price
            self._uow.orders.save_line(line)
            logger.info(
                "order.line_updated",
                order_id=str(order.id),
                item_id=str(item_id),
                position=line.position,
            )
            return line

    def remove_line(
        self, order_id: Any, item_id: Any, position: Optional[int] = None
    ) -> None:
        """Delete one line and give its quantity back to the item.

        The line is addressed like in ``update_line``: by item, with
        *position* required when the item appears on several lines.
        Stock returns through the ledger on the locked item row.

        Raises:
            NotFound: order or line does not exist.
            InvalidOrder: the item is on several lines and no position
                was given.
        """
        with self._uow:
            order = self._lock_order(order_id)
            line = self._single_line(order, item_id, position)

            item = self._uow.items.lock_many([line.item_id]).get(str(line.item_id))
            if item is not None:
                self._ledger.adjust(item, line.quantity)
                self._uow.items.save(item)

            self._uow.orders.delete_line(line)
            logger.info(
                "order.line_removed",
                order_id=str(order.id),
                item_id=str(item_id),
                position=line.position,
                restored=line.quantity,
            )

    def delete_order(self, order_id: Any) -> None:
        """Delete an order and its lines; consumed stock is not restored.

        Raises:
            NotFound: the order does not exist.
            IllegalOperation: the order has at least one invoice.
        """
        with self._uow:
            order = self._lock_order(order_id)
            log = logger.bind(order_id=str(order.id))

            if self._uow.orders.has_invoices(order):
                log.warning("order.delete_refused_invoiced")
                raise IllegalOperation(f"Order {order.id} has invoices and cannot be deleted.")

            order.add_domain_event(
                OrderDeleted(aggregate_id=order.id, line_count=order.lines.count())
            )
            self._uow.orders.delete(order)
            log.info("order.delete_completed")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: Any) -> Order:
        order = self._uow.orders.get_by_id(order_id)
        if order is None:
            raise NotFound(EntityKind.ORDER, order_id)
        return order

    def list_orders(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        return self._uow.orders.list(filters)

    def list_orders_by_client(self, client_id: Any) -> List[Order]:
        client = self._resolve_client(client_id)
        return self._uow.orders.list({"client": client})

    def list_lines(self, order_id: Any) -> List[OrderLine]:
        """Lines of the order in position order."""
        return list(self.get_order(order_id).lines.all())

    def line_subtotal(
        self, order_id: Any, item_id: Any, position: Optional[int] = None
    ) -> Decimal:
        order = self.get_order(order_id)
        matches = [
            line
            for line in order.lines.all()
            if str(line.item_id) == str(item_id)
            and (position is None or line.position == position)
        ]
        return self._pick_line(matches, order_id, item_id).subtotal

    def calculate_total(self, order_id: Any) -> Decimal:
        return self.get_order(order_id).total

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _lock_order(self, order_id: Any) -> Order:
        order = self._uow.orders.get_for_update(order_id)
        if order is None:
            raise NotFound(EntityKind.ORDER, order_id)
        return order

    def _single_line(
        self, order: Order, item_id: Any, position: Optional[int]
    ) -> OrderLine:
        lines = self._uow.orders.lines_for_item(order, item_id, position)
        return self._pick_line(lines, order.id, item_id)

    @staticmethod
    def _pick_line(lines: List[OrderLine], order_id: Any, item_id: Any) -> OrderLine:
        if not lines:
            raise NotFound(EntityKind.ORDER_LINE, f"{order_id}/{item_id}")
        if len(lines) > 1:
            raise InvalidOrder(
                f"ambiguous: item {item_id} appears on {len(lines)} lines, "
                "specify a position"
            )
        return lines[0]

    def _require_order_status(self, status_id: Any) -> StatusValue:
        status = self._uow.statuses.get_by_id(status_id)
        if status is None:
            raise NotFound(EntityKind.STATUS, status_id)
        if status.category != StatusCategory.ORDER:
            raise InvalidOrder(f"status {status_id} is not an order status")
        return status

    def _resolve_client(self, client_id: Any) -> Optional[InternalClient]:
        if client_id is None:
            return None
        client = self._uow.clients.get_by_id(client_id)
        if client is None:
            raise NotFound(EntityKind.INTERNAL_CLIENT, client_id)
        return client

    @staticmethod
    def _validate_line_values(
        quantity: int, unit_price: Decimal, line_no: Optional[int] = None
    ) -> None:
        where = f"line {line_no}: " if line_no is not None else ""
        if quantity is None or quantity < 1:
            raise InvalidOrder(f"{where}quantity must be at least 1")
        if unit_price is None or unit_price <= 0:
            raise InvalidOrder(f"{where}unit price must be greater than zero")
