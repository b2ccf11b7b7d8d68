"""Item service layer (Use Cases).

Business rules enforced:
- Item code is unique (``DuplicateResource``), also when a concurrent
  insert wins the race and only the unique index catches it.
- Every reference must exist (``NotFound``); the status must belong to
  the ITEM category (``InvalidData``).
- Variant attributes must match ``kind`` (``InvalidData``).
- ``max_stock`` is never below ``min_stock``.
- Stock moves only through ``StockLedger`` on a locked row.
- Deletion goes through the referential guard: an item on any line of
  a non-terminal order cannot be removed.
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING, List, Optional

import structlog
from django.utils import timezone

from modules.core.constants import EntityKind
from modules.core.exceptions import DuplicateResource, InvalidData, NotFound
from modules.core.repositories.django_repository import unique_violation_as
from modules.core.services import ReferenceEntityService
from modules.inventory.attributes import (
    RawMaterialAttributes,
    dump_attributes,
    parse_attributes,
)
from modules.inventory.ledger import StockLedger
from modules.inventory.models import Item
from modules.statuses.models import StatusCategory
from modules.statuses.services import require_status

if TYPE_CHECKING:
    from modules.core.unit_of_work import DjangoUnitOfWork
    from modules.inventory.dtos import ItemDTO, UpdateItemDTO

logger = structlog.get_logger(__name__)


class ItemService:
    """Application service for Item use-cases."""

    def __init__(
        self,
        uow: DjangoUnitOfWork,
        ledger: Optional[StockLedger] = None,
    ) -> None:
        self._uow = uow
        self._ledger = ledger or StockLedger()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_item(self, dto: ItemDTO) -> Item:
        log = logger.bind(code=dto.code, kind=dto.kind)

        with self._uow:
            if self._uow.items.code_taken(dto.code):
                log.warning("item.duplicate_code")
                raise DuplicateResource(EntityKind.ITEM, dto.code)

            attributes = parse_attributes(dto.kind, dto.attributes)
            item = Item(
                kind=dto.kind,
                code=dto.code,
                name=dto.name,
                description=dto.description,
                unit_of_measure=dto.unit_of_measure,
                unit_price=dto.unit_price,
                available_stock=dto.available_stock,
                min_stock=dto.min_stock,
                max_stock=dto.max_stock,
                expires_on=dto.expires_on,
                status=require_status(self._uow, dto.status_id, StatusCategory.ITEM),
                supplier=self._require(self._uow.suppliers, EntityKind.SUPPLIER, dto.supplier_id),
                category=self._require(self._uow.categories, EntityKind.CATEGORY, dto.category_id),
                warehouse=self._require(self._uow.warehouses, EntityKind.WAREHOUSE, dto.warehouse_id),
                owner=self._require(self._uow.users, EntityKind.USER, dto.owner_id),
                attributes=dump_attributes(attributes),
            )
            if dto.received_at is not None:
                item.received_at = dto.received_at
            item.fabric_supplier = self._fabric_supplier(attributes)

            with unique_violation_as(EntityKind.ITEM, dto.code):
                item = self._uow.items.save(item)
            log.info("item.created", item_id=str(item.id))
            return item

    def update_item(self, item_id: str, dto: UpdateItemDTO) -> Item:
        """Apply the non-``None`` fields of *dto* to the item.

        Raises:
            NotFound: the item or a new reference does not exist.
            DuplicateResource: the new code is taken by another item.
            InvalidData: stock bounds or attributes are inconsistent.
        """
        with self._uow:
            item = self._uow.items.get_for_update(item_id)
            if item is None:
                raise NotFound(EntityKind.ITEM, item_id)
            log = logger.bind(item_id=str(item.id))

            if dto.code is not None and dto.code != item.code:
                if self._uow.items.code_taken(dto.code, exclude_id=item.pk):
                    log.warning("item.duplicate_code", code=dto.code)
                    raise DuplicateResource(EntityKind.ITEM, dto.code)
                item.code = dto.code

            for field in (
                "name",
                "description",
                "unit_of_measure",
                "unit_price",
                "min_stock",
                "max_stock",
                "expires_on",
            ):
                value = getattr(dto, field)
                if value is not None:
                    setattr(item, field, value)

            if item.max_stock is not None and item.max_stock < item.min_stock:
                raise InvalidData("max_stock cannot be lower than min_stock.")

            if dto.status_id is not None:
                item.status = require_status(self._uow, dto.status_id, StatusCategory.ITEM)
            if dto.supplier_id is not None:
                item.supplier = self._require(self._uow.suppliers, EntityKind.SUPPLIER, dto.supplier_id)
            if dto.category_id is not None:
                item.category = self._require(self._uow.categories, EntityKind.CATEGORY, dto.category_id)
            if dto.warehouse_id is not None:
                item.warehouse = self._require(self._uow.warehouses, EntityKind.WAREHOUSE, dto.warehouse_id)

            if dto.attributes is not None:
                attributes = parse_attributes(item.kind, dto.attributes)
                item.attributes = dump_attributes(attributes)
                item.fabric_supplier = self._fabric_supplier(attributes)

            with unique_violation_as(EntityKind.ITEM, item.code):
                item = self._uow.items.save(item)
            log.info("item.updated")
            return item

    def adjust_stock(self, item_id: str, delta: int) -> Item:
        """Lock the item row and apply *delta* through the ledger.

        Raises:
            NotFound: the item does not exist.
            InsufficientStock: the adjustment would go below zero.
        """
        with self._uow:
            item = self._uow.items.get_for_update(item_id)
            if item is None:
                raise NotFound(EntityKind.ITEM, item_id)
            self._ledger.adjust(item, delta)
            return self._uow.items.save(item)

    def delete_item(self, item_id: str) -> None:
        ReferenceEntityService(self._uow).delete(EntityKind.ITEM, item_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_item(self, item_id: str) -> Item:
        item = self._uow.items.get_by_id(item_id)
        if item is None:
            raise NotFound(EntityKind.ITEM, item_id)
        return item

    def list_below_minimum(self) -> List[Item]:
        return self._uow.items.list_below_minimum()

    def list_expiring(self, within_days: int) -> List[Item]:
        """Items whose ``expires_on`` falls between today and today +
        *within_days*, both inclusive, soonest first.

        Raises ``InvalidData`` for a negative window.
        """
        if within_days < 0:
            raise InvalidData("within_days cannot be negative.")
        today = timezone.localdate()
        return self._uow.items.list_expiring(today, today + timedelta(days=within_days))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _require(repository, kind: str, entity_id):
        entity = repository.get_by_id(entity_id)
        if entity is None:
            raise NotFound(kind, entity_id)
        return entity

    def _fabric_supplier(self, attributes):
        if not isinstance(attributes, RawMaterialAttributes):
            return None
        if attributes.fabric_supplier_id is None:
            return None
        return self._require(
            self._uow.suppliers, EntityKind.SUPPLIER, attributes.fabric_supplier_id
        )
