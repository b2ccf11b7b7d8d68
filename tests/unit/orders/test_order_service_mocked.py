"""OrderService validation order, checked against a mocked unit of work."""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from modules.core.exceptions import NotFound
from modules.orders.dtos import CreateOrderDTO, OrderLineDTO
from modules.orders.exceptions import InvalidOrder
from modules.orders.services import OrderService
from modules.statuses.models import StatusCategory

pytestmark = pytest.mark.unit


@pytest.fixture()
def uow():
    mock = MagicMock()
    mock.statuses.get_by_id.return_value = MagicMock(
        category=StatusCategory.ORDER, label="PENDING"
    )
    mock.items.lock_many.return_value = {}
    return mock


def _dto(**overrides):
    fields = {
        "status_id": uuid4(),
        "lines": [OrderLineDTO(item_id=uuid4(), quantity=1, unit_price=Decimal("1.00"))],
    }
    fields.update(overrides)
    return CreateOrderDTO(**fields)


def test_empty_lines_rejected_before_any_lookup(uow):
    with pytest.raises(InvalidOrder):
        OrderService(uow).create_order(_dto(lines=[]))

    uow.statuses.get_by_id.assert_not_called()


def test_missing_status(uow):
    uow.statuses.get_by_id.return_value = None
    with pytest.raises(NotFound):
        OrderService(uow).create_order(_dto())
    uow.items.lock_many.assert_not_called()


def test_status_of_wrong_category(uow):
    uow.statuses.get_by_id.return_value = MagicMock(category=StatusCategory.ITEM)
    with pytest.raises(InvalidOrder):
        OrderService(uow).create_order(_dto())


def test_missing_client(uow):
    uow.clients.get_by_id.return_value = None
    with pytest.raises(NotFound) as exc_info:
        OrderService(uow).create_order(_dto(client_id=uuid4()))
    assert exc_info.value.kind == "internal_client"


def test_missing_item_never_reaches_ledger(uow):
    ledger = MagicMock()
    with pytest.raises(NotFound):
        OrderService(uow, ledger=ledger).create_order(_dto())
    ledger.adjust.assert_not_called()
    uow.orders.save.assert_not_called()
