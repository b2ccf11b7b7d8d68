"""Access-control use cases.

``RolePermissionService`` maintains the role -> permission grant set.
``replace_all`` resolves every requested permission before touching the
existing set, so an unknown id leaves the role exactly as it was.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List

import structlog

from modules.access.exceptions import AlreadyGranted
from modules.access.models import Permission, Role, UserAccount
from modules.core.constants import EntityKind
from modules.core.exceptions import DuplicateResource, NotFound
from modules.core.repositories.django_repository import unique_violation_as
from modules.statuses.models import StatusCategory
from modules.statuses.services import require_status

if TYPE_CHECKING:
    from modules.access.dtos import PermissionDTO, RoleDTO, UserAccountDTO
    from modules.core.unit_of_work import DjangoUnitOfWork

logger = structlog.get_logger(__name__)


class AccessService:
    """Creation and renaming of permissions and roles; user accounts."""

    def __init__(self, uow: DjangoUnitOfWork) -> None:
        self._uow = uow

    def create_permission(self, dto: PermissionDTO) -> Permission:
        with self._uow:
            self._ensure_name_free(self._uow.permissions, EntityKind.PERMISSION, dto.name)
            with unique_violation_as(EntityKind.PERMISSION, dto.name):
                permission = self._uow.permissions.save(
                    Permission(name=dto.name, description=dto.description)
                )
            logger.info("permission.created", permission_id=str(permission.id))
            return permission

    def update_permission(self, permission_id: str, dto: PermissionDTO) -> Permission:
        """Raises ``NotFound``, or ``DuplicateResource`` on a taken name."""
        with self._uow:
            permission = self._uow.permissions.get_for_update(permission_id)
            if permission is None:
                raise NotFound(EntityKind.PERMISSION, permission_id)
            self._ensure_name_free(
                self._uow.permissions, EntityKind.PERMISSION, dto.name, permission.pk
            )

            permission.name = dto.name
            permission.description = dto.description
            with unique_violation_as(EntityKind.PERMISSION, dto.name):
                permission = self._uow.permissions.save(permission)
            logger.info("permission.updated", permission_id=str(permission.id))
            return permission

    def create_role(self, dto: RoleDTO) -> Role:
        with self._uow:
            self._ensure_name_free(self._uow.roles, EntityKind.ROLE, dto.name)
            with unique_violation_as(EntityKind.ROLE, dto.name):
                role = self._uow.roles.save(Role(name=dto.name, description=dto.description))
            logger.info("role.created", role_id=str(role.id))
            return role

    def update_role(self, role_id: str, dto: RoleDTO) -> Role:
        """Rename or re-describe a role; its permission set is untouched."""
        with self._uow:
            role = self._uow.roles.get_for_update(role_id)
            if role is None:
                raise NotFound(EntityKind.ROLE, role_id)
            self._ensure_name_free(self._uow.roles, EntityKind.ROLE, dto.name, role.pk)

            role.name = dto.name
            role.description = dto.description
            with unique_violation_as(EntityKind.ROLE, dto.name):
                role = self._uow.roles.save(role)
            logger.info("role.updated", role_id=str(role.id))
            return role

    def create_user(self, dto: UserAccountDTO) -> UserAccount:
        """Raises ``DuplicateResource`` on e-mail, ``NotFound`` on status/role."""
        with self._uow:
            if self._uow.users.exists(email__iexact=dto.email):
                raise DuplicateResource(EntityKind.USER, dto.email)

            status = require_status(self._uow, dto.status_id, StatusCategory.USER)
            role = self._uow.roles.get_by_id(dto.role_id)
            if role is None:
                raise NotFound(EntityKind.ROLE, dto.role_id)

            user = UserAccount(name=dto.name, email=dto.email, status=status, role=role)
            user.set_password(dto.password)
            with unique_violation_as(EntityKind.USER, dto.email):
                user = self._uow.users.save(user)
            logger.info("user.created", user_id=str(user.id), role=role.name)
            return user

    
    @staticmethod
    def _ensure_name_free(repository, kind: str, name: str, exclude_id=None) -> None:
        if repository.exists(exclude_id=exclude_id, name=name):
            logger.warning("access.duplicate_name", kind=str(kind), name=name)
            raise DuplicateResource(kind, name)


class RolePermissionService:
    def __init__(self, uow: DjangoUnitOfWork) -> None:
        self._uow = uow

    def grant(self, role_id: str, permission_id: str) -> Role:
        """Add one permission to a role.

        Raises:
            NotFound: role or permission does not exist.
            AlreadyGranted: the role already holds the permission.
        """
        with self._uow:
            role = self._lock_role(role_id)
            permission = self._resolve_permission(permission_id)

            if role.permissions.filter(pk=permission.pk).exists():
                raise AlreadyGranted(role_id, permission_id)

            role.permissions.add(permission)
            logger.info(
                "role.permission_granted",
                role_id=str(role.id),
                permission_id=str(permission.id),
            )
            return role

    def revoke(self, role_id: str, permission_id: str) -> Role:
        """Remove one permission from a role.

        Raises:
            NotFound: role or permission does not exist, or the role does
                not hold the permission.
        """
        with self._uow:
            role = self._lock_role(role_id)
            permission = self._resolve_permission(permission_id)

            if not role.permissions.filter(pk=permission.pk).exists():
                raise NotFound(EntityKind.PERMISSION, permission_id)

            role.permissions.remove(permission)
            logger.info(
                "role.permission_revoked",
                role_id=str(role.id),
                permission_id=str(permission.id),
            )
            return role

    def replace_all(self, role_id: str, permission_ids: Iterable[str]) -> Role:
        """Replace the role's whole permission set.

        Every id is resolved first.  The first unknown id raises
        ``NotFound(permission, id)`` before the current set is cleared.
        Repeated ids collapse to one grant.
        """
        with self._uow:
            role = self._lock_role(role_id)

            resolved: List[Permission] = []
            seen = set()
            for permission_id in permission_ids:
                permission = self._resolve_permission(permission_id)
                if permission.pk not in seen:
                    seen.add(permission.pk)
                    resolved.append(permission)

            role.permissions.clear()
            role.permissions.add(*resolved)
            logger.info(
                "role.permissions_replaced",
                role_id=str(role.id),
                permission_count=len(resolved),
            )
            return role

    def list_permissions(self, role_id: str) -> List[Permission]:
        role = self._uow.roles.get_by_id(role_id)
        if role is None:
            raise NotFound(EntityKind.ROLE, role_id)
        return list(role.permissions.order_by("name"))

    def _lock_role(self, role_id: str) -> Role:
        role = self._uow.roles.get_for_update(role_id)
        if role is None:
            raise NotFound(EntityKind.ROLE, role_id)
        return role

    def _resolve_permission(self, permission_id: str) -> Permission:
        permission = self._uow.permissions.get_by_id(permission_id)
        if permission is None:
            raise NotFound(EntityKind.PERMISSION, permission_id)
        return permission
