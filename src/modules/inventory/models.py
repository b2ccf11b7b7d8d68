"""Stock-bearing items.

``Item`` is a single table for both variants.  ``kind`` is the
discriminant and ``attributes`` holds the variant-specific payload,
validated by the pydantic models in ``modules.inventory.attributes``.
Price, stock and code logic is written once against the common columns.

Business rules implemented:
- ``code`` is unique and stored upper-case.
- ``available_stock`` never goes below zero (check constraint + ledger).
- ``unit_price`` is strictly positive.
- Every reference (status, supplier, category, warehouse, owner) is
  ``PROTECT`` so the database backs up the referential guard.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

import structlog
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from modules.core.models import BaseModel
from shared.domain.events import DomainEventMixin

logger = structlog.get_logger(__name__)


class ItemKind(models.TextChoices):
    RAW_MATERIAL = "RAW_MATERIAL", "Raw material"
    FINISHED_PRODUCT = "FINISHED_PRODUCT", "Finished product"


class Item(DomainEventMixin, BaseModel):
    kind = models.CharField(max_length=20, choices=ItemKind.choices)
    code = models.CharField(max_length=50, unique=True)
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True, default="")
    unit_of_measure = models.CharField(max_length=20, default="UNIT")
    unit_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    available_stock = models.IntegerField(default=0)
    min_stock = models.IntegerField(default=0)
    max_stock = models.IntegerField(null=True, blank=True)
    received_at = models.DateField(default=timezone.localdate)
    expires_on = models.DateField(null=True, blank=True)

    status = models.ForeignKey(
        "statuses.StatusValue", on_delete=models.PROTECT, related_name="items"
    )
    supplier = models.ForeignKey(
        "catalog.Supplier", on_delete=models.PROTECT, related_name="items"
    )
    category = models.ForeignKey(
        "catalog.Category", on_delete=models.PROTECT, related_name="items"
    )
    warehouse = models.ForeignKey(
        "catalog.Warehouse", on_delete=models.PROTECT, related_name="items"
    )
    owner = models.ForeignKey(
        "access.UserAccount", on_delete=models.PROTECT, related_name="items"
    )
    # Raw materials only: who supplies the fabric, may differ from ``supplier``.
    fabric_supplier = models.ForeignKey(
        "catalog.Supplier",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="fabric_items",
    )

    attributes = models.JSONField(default=dict, blank=True)

    class Meta:
        db_table = "items"
        ordering = ["code"]
        indexes = [
            models.Index(fields=["kind"], name="items_kind_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(available_stock__gte=0),
                name="items_available_stock_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(min_stock__gte=0),
                name="items_min_stock_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(unit_price__gt=0),
                name="items_unit_price_positive",
            ),
        ]

    @property
    def is_below_minimum(self) -> bool:
        return self.available_stock < self.min_stock

    @property
    def typed_attributes(self):
        from modules.inventory.attributes import parse_attributes

        return parse_attributes(self.kind, self.attributes)

    def save(self, *args: Any, **kwargs: Any) -> None:
        self.code = self.code.strip().upper()
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.code} ({self.available_stock} {self.unit_of_measure})"
