"""Internal clients: departments or partners that place orders."""

from __future__ import annotations

from typing import Any

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel


class ClientType(models.TextChoices):
    INTERNAL = "INTERNAL", "Internal"
    EXTERNAL = "EXTERNAL", "External"


class InternalClient(BaseModel):
    code = models.CharField(max_length=30, unique=True)
    name = models.CharField(max_length=100)
    client_type = models.CharField(
        max_length=10,
        choices=ClientType.choices,
        default=ClientType.INTERNAL,
    )
    manager = models.ForeignKey(
        "access.UserAccount",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="managed_clients",
    )
    location = models.CharField(max_length=255, blank=True, default="")
    annual_budget = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)],
    )

    class Meta:
        db_table = "internal_clients"
        ordering = ["code"]

    def save(self, *args: Any, **kwargs: Any) -> None:
        self.code = self.code.strip().upper()
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.code} - {self.name}"
