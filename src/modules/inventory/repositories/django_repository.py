"""Django ORM repository for the Item aggregate."""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db.models import F

from modules.core.outbox import record_domain_events
from modules.core.repositories.django_repository import DjangoModelRepository
from modules.inventory.models import Item

logger = structlog.get_logger(__name__)

_RELATED = ("status", "supplier", "category", "warehouse", "owner")


class ItemDjangoRepository(DjangoModelRepository[Item]):
    def __init__(self) -> None:
        super().__init__(Item)

    def get_by_id(self, id: Any) -> Optional[Item]:
        try:
            return Item.objects.select_related(*_RELATED).filter(pk=id).first()
        except (ValueError, ValidationError):
            return None

    def lock_many(self, ids: Iterable[Any]) -> Dict[str, Item]:
        """Lock every item in *ids* and return them keyed by ``str(pk)``.

        Rows are locked in primary-key order so two callers touching the
        same items always queue instead of deadlocking.  Unknown or
        malformed ids are simply absent from the result.  Each row is
        loaded once, so repeated ids share one instance.
        """
        valid = []
        for raw in {str(i) for i in ids}:
            try:
                valid.append(Item._meta.pk.to_python(raw))
            except ValidationError:
                continue
        if not valid:
            return {}
        locked = Item.objects.select_for_update().filter(pk__in=valid).order_by("pk")
        return {str(item.pk): item for item in locked}

    def code_taken(self, code: str, exclude_id: Any = None) -> bool:
        queryset = Item.objects.filter(code=code.strip().upper())
        if exclude_id is not None:
            queryset = queryset.exclude(pk=exclude_id)
        return queryset.exists()

    def list_below_minimum(self) -> List[Item]:
        return list(
            Item.objects.select_related(*_RELATED).filter(
                available_stock__lt=F("min_stock")
            )
        )

    def list_expiring(self, start: date, end: date) -> List[Item]:
        return list(
            Item.objects.select_related(*_RELATED)
            .filter(expires_on__range=(start, end))
            .order_by("expires_on", "code")
        )

    def save(self, entity: Item) -> Item:
        entity.save()
        event_count = record_domain_events(entity, topic="inventory")
        logger.info(
            "item.saved",
            item_id=str(entity.id),
            available_stock=entity.available_stock,
            event_count=event_count,
        )
        return entity
