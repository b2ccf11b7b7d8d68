"""Shared reference entities for the item catalog.

None of these own anything: items point at them, and deleting one is
only possible through ``ReferenceEntityService`` once nothing does.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel


class Category(BaseModel):
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True, default="")

    class Meta:
        db_table = "categories"
        ordering = ["name"]
        verbose_name_plural = "categories"

    def __str__(self) -> str:
        return self.name


class WarehouseType(models.TextChoices):
    RAW_MATERIAL = "RAW_MATERIAL", "Raw material"
    FINISHED_PRODUCT = "FINISHED_PRODUCT", "Finished product"
    TEMPORARY = "TEMPORARY", "Temporary"


class Warehouse(BaseModel):
    name = models.CharField(max_length=100, unique=True)
    warehouse_type = models.CharField(
        max_length=20,
        choices=WarehouseType.choices,
        default=WarehouseType.RAW_MATERIAL,
    )
    max_capacity = models.PositiveIntegerField(null=True, blank=True)
    location = models.CharField(max_length=255, blank=True, default="")
    manager = models.ForeignKey(
        "access.UserAccount",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="managed_warehouses",
    )
    status = models.ForeignKey(
        "statuses.StatusValue",
        on_delete=models.PROTECT,
        related_name="warehouses",
    )

    class Meta:
        db_table = "warehouses"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Supplier(BaseModel):
    name = models.CharField(max_length=100)
    address = models.CharField(max_length=255, blank=True, default="")
    phone = models.CharField(max_length=30, blank=True, default="")
    email = models.EmailField(unique=True)

    class Meta:
        db_table = "suppliers"
        ordering = ["name"]

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"
