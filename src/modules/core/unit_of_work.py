"""Explicit unit of work for service-layer use cases.

A ``DjangoUnitOfWork`` is a transaction boundary plus the repositories
that may be used inside it.  Services receive one via constructor
injection and wrap every public operation in ``with self._uow:``, so
all loads, locks and writes of a call commit or roll back together.

Entering is re-entrant: a service calling another service that shares
the same unit of work opens a savepoint, not a second transaction.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional

import structlog
from django.db import transaction

logger = structlog.get_logger(__name__)


class DjangoUnitOfWork:
    """Unit of work backed by ``django.db.transaction.atomic``."""

    def __init__(self, using: Optional[str] = None) -> None:
        from django.apps import apps

        from modules.core.repositories.django_repository import DjangoModelRepository
        from modules.inventory.repositories.django_repository import (
            ItemDjangoRepository,
        )
        from modules.orders.repositories.django_repository import (
            OrderDjangoRepository,
        )

        self._using = using
        self._atomics: List[Any] = []

        self.statuses = DjangoModelRepository(apps.get_model("statuses", "StatusValue"))
        self.categories = DjangoModelRepository(apps.get_model("catalog", "Category"))
        self.warehouses = DjangoModelRepository(apps.get_model("catalog", "Warehouse"))
        self.suppliers = DjangoModelRepository(apps.get_model("catalog", "Supplier"))
        self.clients = DjangoModelRepository(apps.get_model("clients", "InternalClient"))
        self.permissions = DjangoModelRepository(apps.get_model("access", "Permission"))
        self.roles = DjangoModelRepository(apps.get_model("access", "Role"))
        self.users = DjangoModelRepository(apps.get_model("access", "UserAccount"))
        self.items = ItemDjangoRepository()
        self.orders = OrderDjangoRepository()

    # ------------------------------------------------------------------
    # Context manager protocol
    # ------------------------------------------------------------------

    def __enter__(self) -> DjangoUnitOfWork:
        atomic = transaction.atomic(using=self._using)
        atomic.__enter__()
        self._atomics.append(atomic)
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        atomic = self._atomics.pop()
        if exc_type is not None:
            logger.info(
                "unit_of_work.rolled_back",
                depth=len(self._atomics),
                error=exc_type.__name__,
            )
        return bool(atomic.__exit__(exc_type, exc, tb))

    @property
    def in_progress(self) -> bool:
        return bool(self._atomics)

    def on_commit(self, callback: Callable[[], None]) -> None:
        """Run *callback* only if the outermost transaction commits."""
        transaction.on_commit(callback, using=self._using)
