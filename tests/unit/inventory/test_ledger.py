"""Unit tests for StockLedger.

Covers:
- Consumption and restock update ``available_stock`` in memory.
- Going below zero raises InsufficientStock and leaves the item intact.
- Every adjustment records a StockAdjusted event.
- Adjustments are not idempotent.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.core.exceptions import InvalidData
from modules.inventory.events import StockAdjusted
from modules.inventory.exceptions import InsufficientStock
from modules.inventory.ledger import StockLedger
from modules.inventory.models import Item, ItemKind

pytestmark = pytest.mark.unit


@pytest.fixture()
def item():
    return Item(
        kind=ItemKind.RAW_MATERIAL,
        code="LEDGER-1",
        name="Ledger item",
        unit_price=Decimal("1.00"),
        available_stock=10,
    )


@pytest.fixture()
def ledger():
    return StockLedger()


class TestAdjust:
    def test_negative_delta_consumes(self, ledger, item):
        result = ledger.adjust(item, -4)
        assert result is item
        assert item.available_stock == 6

    def test_positive_delta_restocks(self, ledger, item):
        ledger.adjust(item, 5)
        assert item.available_stock == 15

    def test_consuming_everything_reaches_zero(self, ledger, item):
        ledger.adjust(item, -10)
        assert item.available_stock == 0

    def test_overdraw_rejected_without_mutation(self, ledger, item):
        with pytest.raises(InsufficientStock) as exc_info:
            ledger.adjust(item, -11)

        assert exc_info.value.item_id == item.id
        assert exc_info.value.available == 10
        assert exc_info.value.requested == 11
        assert item.available_stock == 10
        assert item.domain_events == []

    def test_not_idempotent(self, ledger, item):
        ledger.adjust(item, -4)
        ledger.adjust(item, -4)
        assert item.available_stock == 2

    def test_records_stock_adjusted_event(self, ledger, item):
        ledger.adjust(item, -3)

        (event,) = item.domain_events
        assert isinstance(event, StockAdjusted)
        assert event.aggregate_id == item.id
        assert event.delta == -3
        assert event.previous_stock == 10
        assert event.new_stock == 7

    @pytest.mark.parametrize("delta", [1.5, "2", True])
    def test_non_integer_delta_rejected(self, ledger, item, delta):
        with pytest.raises(InvalidData):
            ledger.adjust(item, delta)
        assert item.available_stock == 10
