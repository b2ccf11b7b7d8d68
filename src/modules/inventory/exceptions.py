"""Inventory domain exceptions."""

from __future__ import annotations

from typing import Any

from modules.core.exceptions import DomainError


class InsufficientStock(DomainError):
    """Consuming *requested* units would drive stock below zero."""

    code = "insufficient_stock"

    def __init__(self, item_id: Any, available: int, requested: int) -> None:
        self.item_id = item_id
        self.available = available
        self.requested = requested
        super().__init__(
            f"Item {item_id}: requested {requested}, available {available}."
        )
