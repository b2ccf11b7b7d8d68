"""Catalog use cases: categories, warehouses and suppliers.

Each natural key (category name, warehouse name, supplier e-mail) is
checked case-insensitively before insert and before a rename, so
callers get ``DuplicateResource`` instead of an ``IntegrityError``.
A concurrent writer that slips past the check is caught by the unique
constraint and reported the same way.

Updates replace every editable field with the DTO's values.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import structlog

from modules.catalog.models import Category, Supplier, Warehouse
from modules.core.constants import EntityKind
from modules.core.exceptions import DuplicateResource, NotFound
from modules.core.repositories.django_repository import unique_violation_as

if TYPE_CHECKING:
    from modules.access.models import UserAccount
    from modules.catalog.dtos import CategoryDTO, SupplierDTO, WarehouseDTO
    from modules.core.unit_of_work import DjangoUnitOfWork
    from modules.statuses.models import StatusValue

logger = structlog.get_logger(__name__)


class CatalogService:
    def __init__(self, uow: DjangoUnitOfWork) -> None:
        self._uow = uow

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def create_category(self, dto: CategoryDTO) -> Category:
        with self._uow:
            self._ensure_category_name_free(dto.name)
            with unique_violation_as(EntityKind.CATEGORY, dto.name):
                category = self._uow.categories.save(
                    Category(name=dto.name, description=dto.description)
                )
            logger.info("category.created", category_id=str(category.id))
            return category

    def update_category(self, category_id: str, dto: CategoryDTO) -> Category:
        """Raises ``NotFound``, or ``DuplicateResource`` when renamed onto
        another category's name."""
        with self._uow:
            category = self._lock(self._uow.categories, EntityKind.CATEGORY, category_id)
            self._ensure_category_name_free(dto.name, exclude_id=category.pk)

            category.name = dto.name
            category.description = dto.description
            with unique_violation_as(EntityKind.CATEGORY, dto.name):
                category = self._uow.categories.save(category)
            logger.info("category.updated", category_id=str(category.id))
            return category

    # ------------------------------------------------------------------
    # Warehouses
    # ------------------------------------------------------------------

    def create_warehouse(self, dto: WarehouseDTO) -> Warehouse:
        """Raises ``NotFound`` for an unknown status or manager."""
        with self._uow:
            self._ensure_warehouse_name_free(dto.name)
            status, manager = self._warehouse_references(dto)

            warehouse = Warehouse(
                name=dto.name,
                warehouse_type=dto.warehouse_type,
                max_capacity=dto.max_capacity,
                location=dto.location,
                manager=manager,
                status=status,
            )
            with unique_violation_as(EntityKind.WAREHOUSE, dto.name):
                warehouse = self._uow.warehouses.save(warehouse)
            logger.info("warehouse.created", warehouse_id=str(warehouse.id))
            return warehouse

    def update_warehouse(self, warehouse_id: str, dto: WarehouseDTO) -> Warehouse:
        with self._uow:
            warehouse = self._lock(self._uow.warehouses, EntityKind.WAREHOUSE, warehouse_id)
            self._ensure_warehouse_name_free(dto.name, exclude_id=warehouse.pk)
            status, manager = self._warehouse_references(dto)

            warehouse.name = dto.name
            warehouse.warehouse_type = dto.warehouse_type
            warehouse.max_capacity = dto.max_capacity
            warehouse.location = dto.location
            warehouse.manager = manager
            warehouse.status = status
            with unique_violation_as(EntityKind.WAREHOUSE, dto.name):
                warehouse = self._uow.warehouses.save(warehouse)
            logger.info("warehouse.updated", warehouse_id=str(warehouse.id))
            return warehouse

    # ------------------------------------------------------------------
    # Suppliers
    # ------------------------------------------------------------------

    def create_supplier(self, dto: SupplierDTO) -> Supplier:
        with self._uow:
            self._ensure_supplier_email_free(dto.email)
            supplier = Supplier(
                name=dto.name,
                email=dto.email,
                address=dto.address,
                phone=dto.phone,
            )
            with unique_violation_as(EntityKind.SUPPLIER, dto.email):
                supplier = self._uow.suppliers.save(supplier)
            logger.info("supplier.created", supplier_id=str(supplier.id))
            return supplier

    def update_supplier(self, supplier_id: str, dto: SupplierDTO) -> Supplier:
        with self._uow:
            supplier = self._lock(self._uow.suppliers, EntityKind.SUPPLIER, supplier_id)
            self._ensure_supplier_email_free(dto.email, exclude_id=supplier.pk)

            supplier.name = dto.name
            supplier.email = dto.email
            supplier.address = dto.address
            supplier.phone = dto.phone
            with unique_violation_as(EntityKind.SUPPLIER, dto.email):
                supplier = self._uow.suppliers.save(supplier)
            logger.info("supplier.updated", supplier_id=str(supplier.id))
            return supplier

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _lock(repository, kind: str, entity_id: str):
        entity = repository.get_for_update(entity_id)
        if entity is None:
            raise NotFound(kind, entity_id)
        return entity

    def _ensure_category_name_free(self, name: str, exclude_id=None) -> None:
        if self._uow.categories.exists(exclude_id=exclude_id, name__iexact=name):
            logger.warning("category.duplicate_name", name=name)
            raise DuplicateResource(EntityKind.CATEGORY, name)

    def _ensure_warehouse_name_free(self, name: str, exclude_id=None) -> None:
        if self._uow.warehouses.exists(exclude_id=exclude_id, name__iexact=name):
            logger.warning("warehouse.duplicate_name", name=name)
            raise DuplicateResource(EntityKind.WAREHOUSE, name)

    def _ensure_supplier_email_free(self, email: str, exclude_id=None) -> None:
        if self._uow.suppliers.exists(exclude_id=exclude_id, email__iexact=email):
            logger.warning("supplier.duplicate_email", email=email)
            raise DuplicateResource(EntityKind.SUPPLIER, email)

    def _warehouse_references(
        self, dto: WarehouseDTO
    ) -> tuple[StatusValue, Optional[UserAccount]]:
        status = self._uow.statuses.get_by_id(dto.status_id)
        if status is None:
            raise NotFound(EntityKind.STATUS, dto.status_id)

        manager = None
        if dto.manager_id is not None:
            manager = self._uow.users.get_by_id(dto.manager_id)
            if manager is None:
                raise NotFound(EntityKind.USER, dto.manager_id)
        return status, manager
