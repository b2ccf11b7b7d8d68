"""Internal client use cases.

Client codes are normalized upper-case by ``ClientDTO`` and unique.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional

import structlog

from modules.clients.models import InternalClient
from modules.core.constants import EntityKind
from modules.core.exceptions import DuplicateResource, NotFound
from modules.core.repositories.django_repository import unique_violation_as

if TYPE_CHECKING:
    from modules.access.models import UserAccount
    from modules.clients.dtos import ClientDTO
    from modules.core.unit_of_work import DjangoUnitOfWork

logger = structlog.get_logger(__name__)


class ClientService:
    def __init__(self, uow: DjangoUnitOfWork) -> None:
        self._uow = uow

    def create_client(self, dto: ClientDTO) -> InternalClient:
        """Raises ``DuplicateResource`` when the code is taken."""
        with self._uow:
            self._ensure_code_free(dto.code)
            client = InternalClient(
                code=dto.code,
                name=dto.name,
                client_type=dto.client_type,
                manager=self._resolve_manager(dto.manager_id),
                location=dto.location,
                annual_budget=dto.annual_budget,
            )
            with unique_violation_as(EntityKind.INTERNAL_CLIENT, dto.code):
                client = self._uow.clients.save(client)
            logger.info("client.created", client_id=str(client.id), code=client.code)
            return client

    def update_client(self, client_id: str, dto: ClientDTO) -> InternalClient:
        """Replace the client's fields.

        Raises:
            NotFound: the client or the new manager does not exist.
            DuplicateResource: the new code belongs to another client.
        """
        with self._uow:
            client = self._uow.clients.get_for_update(client_id)
            if client is None:
                raise NotFound(EntityKind.INTERNAL_CLIENT, client_id)
            self._ensure_code_free(dto.code, exclude_id=client.pk)

            client.code = dto.code
            client.name = dto.name
            client.client_type = dto.client_type
            client.manager = self._resolve_manager(dto.manager_id)
            client.location = dto.location
            client.annual_budget = dto.annual_budget
            with unique_violation_as(EntityKind.INTERNAL_CLIENT, dto.code):
                client = self._uow.clients.save(client)
            logger.info("client.updated", client_id=str(client.id), code=client.code)
            return client

    def get_client(self, client_id: str) -> InternalClient:
        client = self._uow.clients.get_by_id(client_id)
        if client is None:
            raise NotFound(EntityKind.INTERNAL_CLIENT, client_id)
        return client

    def list_clients(self) -> List[InternalClient]:
        return self._uow.clients.list()

    def _ensure_code_free(self, code: str, exclude_id: Any = None) -> None:
        if self._uow.clients.exists(exclude_id=exclude_id, code=code):
            logger.warning("client.duplicate_code", code=code)
            raise DuplicateResource(EntityKind.INTERNAL_CLIENT, code)

    def _resolve_manager(self, manager_id: Any) -> Optional[UserAccount]:
        if manager_id is None:
            return None
        manager = self._uow.users.get_by_id(manager_id)
        if manager is None:
            raise NotFound(EntityKind.USER, manager_id)
        return manager
