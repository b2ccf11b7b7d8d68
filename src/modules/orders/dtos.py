"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.  DTOs are
immutable (``frozen=True``).  Line quantity and price rules are *not*
checked here: ``OrderService`` checks them line by line so the first
offending line is reported as ``InvalidOrder``.

- ``OrderLineDTO``: one ``{item_id, quantity, unit_price}`` entry.
- ``CreateOrderDTO``: order creation request.
- ``UpdateOrderHeaderDTO``: status and client replacement.
- ``UpdateOrderLineDTO``: per-line quantity / price change.
- ``OrderOutputDTO``: read model with lines and derived totals.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from modules.orders.models import Order


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class OrderLineDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    item_id: UUID
    quantity: int
    unit_price: Decimal


class CreateOrderDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    status_id: UUID
    client_id: Optional[UUID] = None
    lines: List[OrderLineDTO]
    notes: str = ""


class UpdateOrderHeaderDTO(BaseModel):
    """``client_id=None`` detaches the order from its client."""

    model_config = ConfigDict(frozen=True)

    status_id: UUID
    client_id: Optional[UUID] = None


class UpdateOrderLineDTO(BaseModel):
    """``position`` disambiguates when the item appears on several lines."""

    model_config = ConfigDict(frozen=True)

    quantity: Optional[int] = None
    unit_price: Optional[Decimal] = None
    position: Optional[int] = None


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class OrderLineOutputDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    position: int
    item_id: Optional[UUID]
    quantity: int
    unit_price: Decimal
    subtotal: Decimal


class OrderOutputDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    placed_at: datetime
    closed_at: Optional[datetime]
    client_id: Optional[UUID]
    status_id: UUID
    status: str
    notes: str
    total: Decimal
    lines: List[OrderLineOutputDTO]

    @classmethod
    def from_entity(cls, order: Order) -> OrderOutputDTO:
        """Assumes ``lines`` and ``status`` are already loaded."""
        lines = [
            OrderLineOutputDTO(
                position=line.position,
                item_id=line.item_id,
                quantity=line.quantity,
                unit_price=line.unit_price,
                subtotal=line.subtotal,
            )
            for line in order.lines.all()
        ]
        return cls(
            id=order.id,
            placed_at=order.placed_at,
            closed_at=order.closed_at,
            client_id=order.client_id,
            status_id=order.status_id,
            status=order.status.label,
            notes=order.notes,
            total=sum((line.subtotal for line in lines), Decimal("0.00")),
            lines=lines,
        )
