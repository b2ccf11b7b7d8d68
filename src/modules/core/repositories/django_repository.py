"""Django ORM repository usable for any model.

Reference entities (statuses, categories, warehouses, ...) need nothing
beyond look-up, existence checks, save and delete, so they share this
implementation instead of one class per model.  Aggregates with richer
queries (items, orders) subclass it.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Generic, Iterator, List, Optional, Type, TypeVar

import structlog
from django.core.exceptions import ValidationError
from django.db import IntegrityError, models, transaction

from modules.core.exceptions import DuplicateResource
from modules.core.repositories.interfaces import IRepository

logger = structlog.get_logger(__name__)

M = TypeVar("M", bound=models.Model)


class DjangoModelRepository(IRepository[M], Generic[M]):
    """Concrete repository backed by a Django model class."""

    def __init__(self, model: Type[M]) -> None:
        self.model = model

    @property
    def label(self) -> str:
        return self.model._meta.label

    def get_by_id(self, id: Any) -> Optional[M]:
        """Returns ``None`` for non-existent or malformed IDs."""
        try:
            return self.model.objects.filter(pk=id).first()
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: Any) -> Optional[M]:
        """``SELECT ... FOR UPDATE``; must run inside a transaction."""
        try:
            return self.model.objects.select_for_update().filter(pk=id).first()
        except (ValueError, ValidationError):
            return None

    def exists(self, exclude_id: Any = None, **lookups: Any) -> bool:
        """``exclude_id`` leaves one row out, for rename checks on update."""
        queryset = self.model.objects.filter(**lookups)
        if exclude_id is not None:
            queryset = queryset.exclude(pk=exclude_id)
        return queryset.exists()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[M]:
        queryset = self.model.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def save(self, entity: M) -> M:
        entity.save()
        logger.info("repository.saved", model=self.label, entity_id=str(entity.pk))
        return entity

    def delete(self, entity: M) -> None:
        entity_id = entity.pk
        entity.delete()
        logger.info("repository.deleted", model=self.label, entity_id=str(entity_id))


@contextmanager
def unique_violation_as(kind: str, key: Any) -> Iterator[None]:
    """Turn a unique-constraint ``IntegrityError`` into ``DuplicateResource``.

    Covers the window between a service's existence check and its insert:
    a concurrent writer that took the key first makes the write fail here.
    The savepoint keeps the enclosing transaction usable for rollback.
    """
    try:
        with transaction.atomic():
            yield
    except IntegrityError as exc:
        logger.warning("repository.unique_violation", kind=str(kind), key=str(key))
        raise DuplicateResource(kind, key) from exc
