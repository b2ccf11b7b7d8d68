"""Access-control domain exceptions."""

from __future__ import annotations

from typing import Any

from modules.core.exceptions import DomainError


class AlreadyGranted(DomainError):
    """The role already holds the permission."""

    code = "already_granted"

    def __init__(self, role_id: Any, permission_id: Any) -> None:
        self.role_id = role_id
        self.permission_id = permission_id
        super().__init__(f"Role {role_id} already holds permission {permission_id}.")
