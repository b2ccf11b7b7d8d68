"""Unit tests for Order DTOs.

Covers:
- Input DTOs: parsing, defaults and immutability.
- OrderOutputDTO: ``from_entity`` with nested lines and derived total.
"""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest
from pydantic import ValidationError

from modules.orders.dtos import (
    CreateOrderDTO,
    OrderLineDTO,
    OrderOutputDTO,
    UpdateOrderHeaderDTO,
    UpdateOrderLineDTO,
)
from modules.orders.models import Order, OrderLine

pytestmark = pytest.mark.unit


class TestInputDTOs:
    def test_line_parses_strings(self):
        item_id = uuid4()
        dto = OrderLineDTO(item_id=str(item_id), quantity="3", unit_price="1.50")
        assert dto.item_id == item_id
        assert dto.quantity == 3
        assert dto.unit_price == Decimal("1.50")

    def test_line_values_not_range_checked_here(self):
        dto = OrderLineDTO(item_id=uuid4(), quantity=0, unit_price=Decimal("-1"))
        assert dto.quantity == 0

    def test_create_defaults(self):
        dto = CreateOrderDTO(status_id=uuid4(), lines=[])
        assert dto.client_id is None
        assert dto.notes == ""

    def test_frozen(self):
        dto = UpdateOrderHeaderDTO(status_id=uuid4())
        with pytest.raises(ValidationError):
            dto.status_id = uuid4()

    def test_line_update_all_optional(self):
        dto = UpdateOrderLineDTO()
        assert (dto.quantity, dto.unit_price, dto.position) == (None, None, None)

    def test_bad_uuid(self):
        with pytest.raises(ValidationError):
            OrderLineDTO(item_id="nope", quantity=1, unit_price=Decimal("1"))


class TestOrderOutputDTO:
    def test_from_entity(self, pending_status, make_item, internal_client):
        item = make_item()
        order = Order.objects.create(status=pending_status, client=internal_client)
        OrderLine.objects.create(
            order=order, item=item, position=1, quantity=2, unit_price=Decimal("3.00")
        )
        OrderLine.objects.create(
            order=order, item=item, position=2, quantity=1, unit_price=Decimal("0.50")
        )

        dto = OrderOutputDTO.from_entity(order)

        assert dto.status == "PENDING"
        assert dto.client_id == internal_client.id
        assert dto.total == Decimal("6.50")
        assert [line.position for line in dto.lines] == [1, 2]
        assert dto.lines[0].subtotal == Decimal("6.00")
