"""Guarded deletion of shared reference entities.

``ReferenceEntityService.delete`` is the single path for removing a
status, category, warehouse, supplier, internal client, permission,
role or item.  Lock, guard check and delete happen in one unit of work,
so a dependent inserted concurrently either waits on the lock or is
rejected by the ``PROTECT`` foreign key.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

import structlog
from django.db.models import ProtectedError

from modules.core.constants import DELETABLE_REPOSITORIES, EntityKind
from modules.core.exceptions import InvalidData, NotFound, ResourceInUse

if TYPE_CHECKING:
    from modules.core.unit_of_work import DjangoUnitOfWork
    from shared.domain.guards import IReferentialGuard

logger = structlog.get_logger(__name__)


class ReferenceEntityService:
    def __init__(
        self,
        uow: DjangoUnitOfWork,
        guard: Optional[IReferentialGuard] = None,
    ) -> None:
        if guard is None:
            from shared.infrastructure.guards import referential_guard

            guard = referential_guard
        self._uow = uow
        self._guard = guard

    def can_delete(self, kind: str, entity_id: Any) -> bool:
        """Read-only check; observes the current persisted state."""
        return self._guard.can_delete(self._resolve_kind(kind), entity_id)

    def delete(self, kind: str, entity_id: Any) -> None:
        """Delete one reference entity if nothing depends on it.

        Raises:
            InvalidData: *kind* is not a deletable entity kind.
            NotFound: the entity does not exist.
            ResourceInUse: a dependent still references it; the first
                dependent in the guard's evaluation order is named.
        """
        kind = self._resolve_kind(kind)
        log = logger.bind(kind=kind, entity_id=str(entity_id))

        with self._uow:
            repository = getattr(self._uow, DELETABLE_REPOSITORIES[kind])
            entity = repository.get_for_update(entity_id)
            if entity is None:
                raise NotFound(kind, entity_id)

            try:
                self._guard.ensure_deletable(kind, entity.pk)
            except ResourceInUse as exc:
                log.warning("guard.blocked", blocking=exc.blocking_dependent_kind)
                raise

            try:
                repository.delete(entity)
            except ProtectedError as exc:
                blocking = next(iter(exc.protected_objects))._meta.model_name
                log.warning("guard.fk_protected", blocking=blocking)
                raise ResourceInUse(kind, entity_id, blocking) from exc
            log.info("reference.deleted")

    @staticmethod
    def _resolve_kind(kind: str) -> str:
        value = str(kind).lower()
        if value not in DELETABLE_REPOSITORIES:
            raise InvalidData(f"Entity kind '{kind}' cannot be deleted here.")
        return EntityKind(value).value
