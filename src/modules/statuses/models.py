"""Status catalog.

A ``StatusValue`` is a ``(category, label)`` pair shared by warehouses,
items, orders and user accounts.  Labels are stored upper-case so that
``"Completed"`` and ``"COMPLETED"`` are the same value.
"""

from __future__ import annotations

from typing import Any

from django.db import models

from modules.core.models import BaseModel


class StatusCategory(models.TextChoices):
    ACTIVE = "ACTIVE", "Active"
    INACTIVE = "INACTIVE", "Inactive"
    PENDING = "PENDING", "Pending"
    CANCELLED = "CANCELLED", "Cancelled"
    ORDER = "ORDER", "Order"
    ITEM = "ITEM", "Item"
    USER = "USER", "User"


def normalize_label(label: str) -> str:
    return " ".join(label.split()).upper()


class StatusValue(BaseModel):
    category = models.CharField(max_length=20, choices=StatusCategory.choices)
    label = models.CharField(max_length=50)

    class Meta:
        db_table = "status_values"
        ordering = ["category", "label"]
        constraints = [
            models.UniqueConstraint(
                fields=["category", "label"],
                name="status_values_category_label_uniq",
            ),
        ]

    def save(self, *args: Any, **kwargs: Any) -> None:
        self.label = normalize_label(self.label)
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.category}:{self.label}"
