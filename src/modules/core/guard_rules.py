"""Dependent-existence rules for every guarded entity kind.

Evaluation order per kind is the registration order below and is part
of the contract: when several dependents exist, ``ResourceInUse`` names
the first one listed here.

    status           -> warehouse, item, order, user
    category         -> item
    warehouse        -> item
    supplier         -> item (supplier), raw_material (item by fabric supplier)
    internal_client  -> order
    permission       -> role
    role             -> user
    item             -> order line on a non-terminal order
"""

from __future__ import annotations

from typing import Any

from django.apps import apps

from modules.core.constants import EntityKind
from modules.statuses.services import terminal_order_labels
from shared.domain.guards import ReferentialGuard


def _exists(app_label: str, model_name: str, field: str):
    def predicate(entity_id: Any) -> bool:
        model = apps.get_model(app_label, model_name)
        return model.objects.filter(**{field: entity_id}).exists()

    return predicate


def _item_on_active_order(entity_id: Any) -> bool:
    order_line = apps.get_model("orders", "OrderLine")
    return (
        order_line.objects.filter(item_id=entity_id)
        .exclude(order__status__label__in=terminal_order_labels())
        .exists()
    )


def register_default_rules(guard: ReferentialGuard) -> None:
    guard.clear()

    guard.register(EntityKind.STATUS, EntityKind.WAREHOUSE, _exists("catalog", "Warehouse", "status_id"))
    guard.register(EntityKind.STATUS, EntityKind.ITEM, _exists("inventory", "Item", "status_id"))
    guard.register(EntityKind.STATUS, EntityKind.ORDER, _exists("orders", "Order", "status_id"))
    guard.register(EntityKind.STATUS, EntityKind.USER, _exists("access", "UserAccount", "status_id"))

    guard.register(EntityKind.CATEGORY, EntityKind.ITEM, _exists("inventory", "Item", "category_id"))

    guard.register(EntityKind.WAREHOUSE, EntityKind.ITEM, _exists("inventory", "Item", "warehouse_id"))

    guard.register(EntityKind.SUPPLIER, EntityKind.ITEM, _exists("inventory", "Item", "supplier_id"))
    guard.register(
        EntityKind.SUPPLIER,
        EntityKind.RAW_MATERIAL,
        _exists("inventory", "Item", "fabric_supplier_id"),
    )

    guard.register(EntityKind.INTERNAL_CLIENT, EntityKind.ORDER, _exists("orders", "Order", "client_id"))

    guard.register(EntityKind.PERMISSION, EntityKind.ROLE, _exists("access", "Role", "permissions__id"))

    guard.register(EntityKind.ROLE, EntityKind.USER, _exists("access", "UserAccount", "role_id"))

    guard.register(EntityKind.ITEM, EntityKind.ORDER_LINE, _item_on_active_order)
