"""Identifiers for the entity kinds that take part in guarded deletion."""

from django.db import models


class EntityKind(models.TextChoices):
    STATUS = "status", "Status value"
    CATEGORY = "category", "Category"
    WAREHOUSE = "warehouse", "Warehouse"
    SUPPLIER = "supplier", "Supplier"
    INTERNAL_CLIENT = "internal_client", "Internal client"
    PERMISSION = "permission", "Permission"
    ROLE = "role", "Role"
    USER = "user", "User account"
    ITEM = "item", "Item"
    RAW_MATERIAL = "raw_material", "Raw material (item by fabric supplier)"
    ORDER = "order", "Order"
    ORDER_LINE = "order_line", "Order line"
    INVOICE = "invoice", "Invoice"


# Unit-of-work repository holding each kind that can be removed through
# ``ReferenceEntityService.delete``.
DELETABLE_REPOSITORIES: dict[str, str] = {
    EntityKind.STATUS: "statuses",
    EntityKind.CATEGORY: "categories",
    EntityKind.WAREHOUSE: "warehouses",
    EntityKind.SUPPLIER: "suppliers",
    EntityKind.INTERNAL_CLIENT: "clients",
    EntityKind.PERMISSION: "permissions",
    EntityKind.ROLE: "roles",
    EntityKind.ITEM: "items",
}
