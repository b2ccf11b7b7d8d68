"""Stock concurrency integration test.

Proves that ``SELECT FOR UPDATE`` in ``OrderService.create_order``
serializes concurrent stock consumption.

Scenario:
- Item with **stock = 5**.
- 10 threads attempt to order 1 unit each simultaneously.
- Exactly 5 succeed, 5 raise ``InsufficientStock``.
- Final stock is 0 (never negative).

Uses ``TransactionTestCase`` so each thread sees committed data.  Only
runs on a backend with row locks (PostgreSQL via ``DATABASE_URL``).
"""

from __future__ import annotations

import logging
import unittest
from concurrent.futures import ThreadPoolExecutor, as_completed
from decimal import Decimal

import django
from django.db import connection
from django.test import TransactionTestCase

from modules.access.models import Role, UserAccount
from modules.catalog.models import Category, Supplier, Warehouse
from modules.core.unit_of_work import DjangoUnitOfWork
from modules.inventory.exceptions import InsufficientStock
from modules.inventory.models import Item, ItemKind
from modules.orders.dtos import CreateOrderDTO, OrderLineDTO
from modules.orders.services import OrderService
from modules.statuses.models import StatusCategory, StatusValue

logger = logging.getLogger(__name__)

INITIAL_STOCK = 5
NUM_WORKERS = 10


@unittest.skipUnless(
    connection.features.has_select_for_update and connection.vendor != "sqlite",
    "needs a database with row-level locks",
)
class TestStockConcurrency(TransactionTestCase):
    """Prove atomic stock consumption under concurrent load."""

    def setUp(self):
        self.order_status = StatusValue.objects.create(
            category=StatusCategory.ORDER, label="PENDING"
        )
        item_status = StatusValue.objects.create(category=StatusCategory.ITEM, label="AVAILABLE")
        user_status = StatusValue.objects.create(category=StatusCategory.USER, label="ACTIVE")
        owner = UserAccount(
            name="Owner",
            email="concurrency@example.com",
            status=user_status,
            role=Role.objects.create(name="OPERATOR"),
        )
        owner.set_password("concurrency-pass")
        owner.save()
        self.item = Item.objects.create(
            kind=ItemKind.RAW_MATERIAL,
            code="THREAD-RED",
            name="Red thread",
            unit_price=Decimal("1.00"),
            available_stock=INITIAL_STOCK,
            status=item_status,
            supplier=Supplier.objects.create(name="Spools", email="spools@example.com"),
            category=Category.objects.create(name="Threads"),
            warehouse=Warehouse.objects.create(name="Main", status=item_status),
            owner=owner,
            attributes={"material_type": "THREAD"},
        )

    def _create_order_in_thread(self, thread_id: int) -> str:
        """Returns 'success' or 'insufficient'; each thread opens its own connection."""
        try:
            OrderService(DjangoUnitOfWork()).create_order(
                CreateOrderDTO(
                    status_id=self.order_status.id,
                    lines=[
                        OrderLineDTO(item_id=self.item.id, quantity=1, unit_price=Decimal("1.00"))
                    ],
                    notes=f"Concurrency thread {thread_id}",
                )
            )
            return "success"
        except InsufficientStock:
            logger.warning("Thread %d: InsufficientStock (expected)", thread_id)
            return "insufficient"
        finally:
            django.db.connections.close_all()

    def _run_workers(self):
        with ThreadPoolExecutor(max_workers=NUM_WORKERS) as pool:
            futures = [pool.submit(self._create_order_in_thread, i) for i in range(NUM_WORKERS)]
            return [future.result() for future in as_completed(futures)]

    def test_concurrent_orders_exhaust_stock(self):
        """10 threads take 1 unit from stock=5: exactly 5 succeed."""
        results = self._run_workers()

        self.assertEqual(results.count("success"), INITIAL_STOCK)
        self.assertEqual(results.count("insufficient"), NUM_WORKERS - INITIAL_STOCK)

        self.item.refresh_from_db()
        self.assertEqual(self.item.available_stock, 0)
