"""Roles, permissions and the user accounts that hold them.

``UserAccount`` is a business record (item owner, warehouse manager),
not the Django auth user.  API authentication stays on
``django.contrib.auth`` + SimpleJWT.
"""

from __future__ import annotations

from django.contrib.auth.hashers import check_password, make_password
from django.db import models

from modules.core.models import BaseModel


class Permission(BaseModel):
    name = models.CharField(max_length=50, unique=True)
    description = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        db_table = "permissions"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Role(BaseModel):
    """A named set of permissions.  The edge carries no attributes."""

    name = models.CharField(max_length=50, unique=True)
    description = models.CharField(max_length=255, blank=True, default="")
    permissions = models.ManyToManyField(
        Permission,
        related_name="roles",
        blank=True,
        db_table="role_permissions",
    )

    class Meta:
        db_table = "roles"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class UserAccount(BaseModel):
    name = models.CharField(max_length=100)
    email = models.EmailField(unique=True)
    password_hash = models.CharField(max_length=255)
    status = models.ForeignKey(
        "statuses.StatusValue",
        on_delete=models.PROTECT,
        related_name="users",
    )
    role = models.ForeignKey(
        Role,
        on_delete=models.PROTECT,
        related_name="users",
    )

    class Meta:
        db_table = "user_accounts"
        ordering = ["name"]

    def set_password(self, raw_password: str) -> None:
        self.password_hash = make_password(raw_password)

    def check_password(self, raw_password: str) -> bool:
        return check_password(raw_password, self.password_hash)

    def __str__(self) -> str:
        return self.email
