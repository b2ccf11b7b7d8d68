"""Item DTOs (pydantic v2, immutable).

``attributes`` is kept as a plain mapping here; the service validates it
against the model for ``kind`` so the error surfaces as ``InvalidData``.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from modules.inventory.models import ItemKind


class ItemDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: ItemKind
    code: str
    name: str
    description: str = ""
    unit_of_measure: str = "UNIT"
    unit_price: Decimal
    available_stock: int = 0
    min_stock: int = 0
    max_stock: Optional[int] = None
    received_at: Optional[date] = None
    expires_on: Optional[date] = None
    status_id: UUID
    supplier_id: UUID
    category_id: UUID
    warehouse_id: UUID
    owner_id: UUID
    attributes: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v: str) -> str:
        v = v.strip().upper()
        if not v:
            raise ValueError("Code must not be blank.")
        return v

    @field_validator("unit_price")
    @classmethod
    def price_must_be_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Unit price must be greater than zero.")
        return v

    @field_validator("available_stock", "min_stock")
    @classmethod
    def stock_not_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Stock values cannot be negative.")
        return v

    @model_validator(mode="after")
    def max_not_below_min(self):
        if self.max_stock is not None and self.max_stock < self.min_stock:
            raise ValueError("max_stock cannot be lower than min_stock.")
        return self


class UpdateItemDTO(BaseModel):
    """Partial update.  ``kind`` and ``available_stock`` are not editable
    here; stock only moves through ``ItemService.adjust_stock``."""

    model_config = ConfigDict(frozen=True)

    code: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    unit_of_measure: Optional[str] = None
    unit_price: Optional[Decimal] = None
    min_stock: Optional[int] = None
    max_stock: Optional[int] = None
    expires_on: Optional[date] = None
    status_id: Optional[UUID] = None
    supplier_id: Optional[UUID] = None
    category_id: Optional[UUID] = None
    warehouse_id: Optional[UUID] = None
    attributes: Optional[Dict[str, Any]] = None

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip().upper()
        if not v:
            raise ValueError("Code must not be blank.")
        return v

    @field_validator("unit_price")
    @classmethod
    def price_must_be_positive(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is not None and v <= 0:
            raise ValueError("Unit price must be greater than zero.")
        return v

    @field_validator("min_stock")
    @classmethod
    def min_not_negative(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 0:
            raise ValueError("min_stock cannot be negative.")
        return v
