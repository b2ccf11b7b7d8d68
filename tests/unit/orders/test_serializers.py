"""Unit tests for Order DRF serializers.

Covers:
- Input serializers: shape and type validation only.
- OrderSerializer / OrderListSerializer: read output with derived totals.
- OrderLineSerializer: lines whose item was deleted.
"""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest

from modules.orders.models import Order, OrderLine
from modules.orders.serializers import (
    CreateOrderSerializer,
    OrderLineSerializer,
    OrderListSerializer,
    OrderSerializer,
    UpdateOrderLineSerializer,
)

pytestmark = pytest.mark.unit


class TestCreateOrderSerializer:
    def test_valid(self):
        serializer = CreateOrderSerializer(
            data={
                "status_id": str(uuid4()),
                "lines": [{"item_id": str(uuid4()), "quantity": 2, "unit_price": "1.00"}],
            }
        )
        assert serializer.is_valid(), serializer.errors
        assert serializer.validated_data["client_id"] is None

    def test_empty_lines_accepted_for_service_to_reject(self):
        serializer = CreateOrderSerializer(data={"status_id": str(uuid4()), "lines": []})
        assert serializer.is_valid(), serializer.errors

    def test_non_positive_quantity_passes_shape_check(self):
        serializer = CreateOrderSerializer(
            data={
                "status_id": str(uuid4()),
                "lines": [{"item_id": str(uuid4()), "quantity": 0, "unit_price": "1.00"}],
            }
        )
        assert serializer.is_valid()

    def test_missing_fields(self):
        serializer = CreateOrderSerializer(data={})
        assert not serializer.is_valid()
        assert set(serializer.errors) == {"status_id", "lines"}


class TestUpdateOrderLineSerializer:
    def test_position_must_be_positive(self):
        serializer = UpdateOrderLineSerializer(data={"position": 0})
        assert not serializer.is_valid()
        assert "position" in serializer.errors


class TestOutputSerializers:
    @pytest.fixture()
    def order(self, pending_status, make_item):
        order = Order.objects.create(status=pending_status, notes="rush")
        OrderLine.objects.create(
            order=order, item=make_item(), position=1, quantity=2, unit_price=Decimal("4.00")
        )
        return order

    def test_order_serializer(self, order):
        data = OrderSerializer(order).data
        assert data["status"] == "PENDING"
        assert data["total"] == "8.00"
        assert data["notes"] == "rush"
        assert data["lines"][0]["subtotal"] == "8.00"

    def test_list_serializer_has_no_lines(self, order):
        data = OrderListSerializer(order).data
        assert "lines" not in data
        assert data["total"] == "8.00"

    def test_line_without_item(self, order):
        line = order.lines.get()
        line.item.delete()
        line.refresh_from_db()

        data = OrderLineSerializer(line).data

        assert data["item_id"] is None
        assert data["item_code"] is None
