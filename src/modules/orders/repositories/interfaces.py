"""Order repository interface.

Extends ``IRepository[Order]`` with what the Order aggregate needs:
line management, invoice look-up and the read-side queries.  The
Service Layer depends exclusively on this contract.
"""

from __future__ import annotations

from abc import abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Iterable, List, Optional, Tuple

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.inventory.models import Item
    from modules.orders.models import Order, OrderLine

LineSpec = Tuple["Item", int, Decimal]


class IOrderRepository(IRepository["Order"]):
    @abstractmethod
    def add_lines(self, order: Order, lines: Iterable[LineSpec]) -> List[OrderLine]:
        """Append lines after the order's current last position."""

    @abstractmethod
    def lines_for_item(
        self, order: Order, item_id: Any, position: Optional[int] = None
    ) -> List[OrderLine]:
        """Lines of *order* referencing *item_id*, optionally one position."""

    @abstractmethod
    def save_line(self, line: OrderLine) -> OrderLine:
        """Persist changes to a single line."""

    @abstractmethod
    def delete_line(self, line: OrderLine) -> None:
        """Remove a single line; positions of the others are kept."""

    @abstractmethod
    def has_invoices(self, order: Order) -> bool:
        """``True`` when at least one invoice was issued for *order*."""
