"""Access DTOs (pydantic v2, immutable)."""

from __future__ import annotations

from typing import List
from uuid import UUID

from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from pydantic import BaseModel, ConfigDict, field_validator


class PermissionDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        v = v.strip().upper()
        if not v:
            raise ValueError("Name must not be blank.")
        return v


class RoleDTO(PermissionDTO):
    pass


class UserAccountDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    email: str
    password: str
    status_id: UUID
    role_id: UUID

    @field_validator("email")
    @classmethod
    def email_must_be_valid(cls, v: str) -> str:
        v = v.strip().lower()
        try:
            validate_email(v)
        except ValidationError as exc:
            raise ValueError("Enter a valid e-mail address.") from exc
        return v

    @field_validator("password")
    @classmethod
    def password_min_length(cls, v: str) -> str:
        if len(v) < 8:
            raise ValueError("Password must have at least 8 characters.")
        return v


class ReplacePermissionsDTO(BaseModel):
    """Full replacement set.  An empty list revokes everything."""

    model_config = ConfigDict(frozen=True)

    permission_ids: List[str]
