"""Status DTOs (pydantic v2, immutable)."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from modules.statuses.models import StatusCategory, normalize_label


class StatusDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: StatusCategory
    label: str

    @field_validator("label")
    @classmethod
    def label_must_not_be_blank(cls, v: str) -> str:
        v = normalize_label(v)
        if not v:
            raise ValueError("Label must not be blank.")
        return v


class UpdateStatusDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: Optional[StatusCategory] = None
    label: Optional[str] = None

    @field_validator("label")
    @classmethod
    def label_must_not_be_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = normalize_label(v)
        if not v:
            raise ValueError("Label must not be blank.")
        return v
