"""Internal client DTOs (pydantic v2, immutable)."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from modules.clients.models import ClientType


class ClientDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    name: str
    client_type: ClientType = ClientType.INTERNAL
    manager_id: Optional[UUID] = None
    location: str = ""
    annual_budget: Optional[Decimal] = None

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v: str) -> str:
        v = v.strip().upper()
        if not v:
            raise ValueError("Code must not be blank.")
        return v

    @field_validator("annual_budget")
    @classmethod
    def budget_not_negative(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is not None and v < 0:
            raise ValueError("Annual budget cannot be negative.")
        return v
