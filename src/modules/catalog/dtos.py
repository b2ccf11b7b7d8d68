"""Catalog DTOs (pydantic v2, immutable)."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from pydantic import BaseModel, ConfigDict, field_validator

from modules.catalog.models import WarehouseType


def _not_blank(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Value must not be blank.")
    return v


class CategoryDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        return _not_blank(v)


class WarehouseDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    status_id: UUID
    warehouse_type: WarehouseType = WarehouseType.RAW_MATERIAL
    max_capacity: Optional[int] = None
    location: str = ""
    manager_id: Optional[UUID] = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        return _not_blank(v)

    @field_validator("max_capacity")
    @classmethod
    def capacity_must_be_positive(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 1:
            raise ValueError("Capacity must be at least 1.")
        return v


class SupplierDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    email: str
    address: str = ""
    phone: str = ""

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        return _not_blank(v)

    @field_validator("email")
    @classmethod
    def email_must_be_valid(cls, v: str) -> str:
        v = v.strip().lower()
        try:
            validate_email(v)
        except ValidationError as exc:
            raise ValueError("Enter a valid e-mail address.") from exc
        return v
