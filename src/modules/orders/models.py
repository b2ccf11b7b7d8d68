"""Order, OrderLine and Invoice models.

Business rules implemented:
- ``placed_at`` is set once at creation and never edited.
- ``closed_at`` is set while the order's status is terminal.
- An order exclusively owns its lines; lines carry a 1-based
  ``position`` so the same item may appear on several lines.
- ``unit_price`` on a line is a snapshot taken at order time.
- ``subtotal`` and the order ``total`` are derived, never stored.
- Invoices ``PROTECT`` their order: an invoiced order cannot be deleted.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from modules.core.models import BaseModel
from shared.domain.events import DomainEventMixin


class Order(DomainEventMixin, BaseModel):
    """Order aggregate root."""

    placed_at = models.DateTimeField(default=timezone.now, editable=False)
    closed_at = models.DateTimeField(null=True, blank=True)
    client = models.ForeignKey(
        "clients.InternalClient",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="orders",
    )
    status = models.ForeignKey(
        "statuses.StatusValue",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    notes = models.TextField(blank=True, default="")

    class Meta:
        db_table = "orders"
        ordering = ["-placed_at"]
        indexes = [
            models.Index(fields=["-placed_at"], name="orders_placed_idx"),
        ]

    @property
    def total(self) -> Decimal:
        """Sum of line subtotals; uses prefetched lines when present."""
        return sum((line.subtotal for line in self.lines.all()), Decimal("0.00"))

    def __str__(self) -> str:
        return f"Order {self.id} ({self.status.label})"


class OrderLine(BaseModel):
    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="lines",
    )
    # Nulled only when an item is deleted after every order using it has
    # reached a terminal status; the line keeps its quantity and price.
    item = models.ForeignKey(
        "inventory.Item",
        on_delete=models.SET_NULL,
        null=True,
        related_name="order_lines",
    )
    position = models.PositiveIntegerField()
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    unit_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )

    class Meta:
        db_table = "order_lines"
        ordering = ["order", "position"]
        constraints = [
            models.UniqueConstraint(
                fields=["order", "position"],
                name="order_lines_order_position_uniq",
            ),
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_lines_quantity_positive",
            ),
            models.CheckConstraint(
                condition=models.Q(unit_price__gt=0),
                name="order_lines_unit_price_positive",
            ),
        ]

    @property
    def subtotal(self) -> Decimal:
        return self.quantity * self.unit_price

    def __str__(self) -> str:
        return f"#{self.position} {self.item_id} x{self.quantity} @ {self.unit_price}"


class InvoiceMovement(models.TextChoices):
    SALE = "SALE", "Sale"
    PURCHASE = "PURCHASE", "Purchase"


class Invoice(BaseModel):
    order = models.ForeignKey(
        Order,
        on_delete=models.PROTECT,
        related_name="invoices",
    )
    movement = models.CharField(max_length=10, choices=InvoiceMovement.choices)
    total = models.DecimalField(max_digits=14, decimal_places=2)
    paid = models.BooleanField(default=False)

    class Meta:
        db_table = "invoices"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"Invoice {self.id} ({self.movement}, {self.total})"
