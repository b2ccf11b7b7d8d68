"""Status catalog use cases."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

import structlog
from django.conf import settings

from modules.core.constants import EntityKind
from modules.core.exceptions import DuplicateResource, InvalidData, NotFound
from modules.core.repositories.django_repository import unique_violation_as
from modules.statuses.models import StatusCategory, StatusValue, normalize_label

if TYPE_CHECKING:
    from modules.core.unit_of_work import DjangoUnitOfWork
    from modules.statuses.dtos import StatusDTO, UpdateStatusDTO

logger = structlog.get_logger(__name__)


class StatusService:
    def __init__(self, uow: DjangoUnitOfWork) -> None:
        self._uow = uow

    def create_status(self, dto: StatusDTO) -> StatusValue:
        """Register a new ``(category, label)`` pair.

        Raises:
            DuplicateResource: the pair already exists.
        """
        with self._uow:
            self._ensure_unique(dto.category, dto.label)
            with unique_violation_as(EntityKind.STATUS, f"{dto.category}:{dto.label}"):
                status = self._uow.statuses.save(
                    StatusValue(category=dto.category, label=dto.label)
                )
            logger.info(
                "status.created",
                status_id=str(status.id),
                category=status.category,
                label=status.label,
            )
            return status

    def update_status(self, status_id: str, dto: UpdateStatusDTO) -> StatusValue:
        with self._uow:
            status = self._uow.statuses.get_for_update(status_id)
            if status is None:
                raise NotFound(EntityKind.STATUS, status_id)

            category = dto.category or status.category
            label = dto.label or status.label
            if (category, label) != (status.category, status.label):
                self._ensure_unique(category, label, exclude_id=status.id)

            status.category = category
            status.label = label
            with unique_violation_as(EntityKind.STATUS, f"{category}:{label}"):
                status = self._uow.statuses.save(status)
            logger.info("status.updated", status_id=str(status.id))
            return status

    def get_status(self, status_id: str) -> StatusValue:
        status = self._uow.statuses.get_by_id(status_id)
        if status is None:
            raise NotFound(EntityKind.STATUS, status_id)
        return status

    def list_statuses(self, category: Optional[str] = None) -> List[StatusValue]:
        if category is not None and category not in StatusCategory.values:
            raise InvalidData(f"Unknown status category '{category}'.")
        filters = {"category": category} if category else None
        return self._uow.statuses.list(filters)

    def _ensure_unique(self, category: str, label: str, exclude_id=None) -> None:
        lookups = {"category": category, "label": label}
        if self._uow.statuses.exists(exclude_id=exclude_id, **lookups):
            logger.warning("status.duplicate", category=category, label=label)
            raise DuplicateResource(EntityKind.STATUS, f"{category}:{label}")


def require_status(uow: DjangoUnitOfWork, status_id, category: str) -> StatusValue:
    """Resolve *status_id* and check it belongs to *category*.

    Raises:
        NotFound: no such status.
        InvalidData: the status belongs to another category.
    """
    status = uow.statuses.get_by_id(status_id)
    if status is None:
        raise NotFound(EntityKind.STATUS, status_id)
    if status.category != category:
        raise InvalidData(
            f"Status {status_id} belongs to category {status.category}, "
            f"expected {category}."
        )
    return status


def terminal_order_labels() -> List[str]:
    """Order status labels after which an order no longer holds stock."""
    return [normalize_label(label) for label in settings.TERMINAL_ORDER_STATUS_LABELS]


def is_terminal_order_status(status: StatusValue) -> bool:
    return status.category == StatusCategory.ORDER and status.label in terminal_order_labels()
