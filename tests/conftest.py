from __future__ import annotations

from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from modules.access.models import Role, UserAccount
from modules.catalog.models import Category, Supplier, Warehouse
from modules.clients.models import InternalClient
from modules.inventory.models import Item, ItemKind
from modules.statuses.models import StatusCategory, StatusValue


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def auth_client():
    """APIClient with a force-authenticated Django user."""
    client = APIClient()
    user = get_user_model().objects.create_user(username="tester", password="testpass123")
    client.force_authenticate(user=user)
    return client


# ---------------------------------------------------------------------------
# Reference data
# ---------------------------------------------------------------------------


@pytest.fixture()
def pending_status():
    return StatusValue.objects.create(category=StatusCategory.ORDER, label="PENDING")


@pytest.fixture()
def completed_status():
    return StatusValue.objects.create(category=StatusCategory.ORDER, label="COMPLETED")


@pytest.fixture()
def item_status():
    return StatusValue.objects.create(category=StatusCategory.ITEM, label="AVAILABLE")


@pytest.fixture()
def user_status():
    return StatusValue.objects.create(category=StatusCategory.USER, label="ACTIVE")


@pytest.fixture()
def role():
    return Role.objects.create(name="OPERATOR", description="Warehouse operator")


@pytest.fixture()
def owner(user_status, role):
    account = UserAccount(
        name="Item Owner",
        email="owner@example.com",
        status=user_status,
        role=role,
    )
    account.set_password("owner-password")
    account.save()
    return account


@pytest.fixture()
def category():
    return Category.objects.create(name="Fabrics")


@pytest.fixture()
def warehouse(item_status):
    return Warehouse.objects.create(name="Main warehouse", status=item_status)


@pytest.fixture()
def supplier():
    return Supplier.objects.create(name="Textiles Ltd", email="sales@textiles.example")


@pytest.fixture()
def internal_client():
    return InternalClient.objects.create(code="CUT-01", name="Cutting department")


@pytest.fixture()
def make_item(item_status, supplier, category, warehouse, owner):
    """Factory for persisted items with sensible defaults."""
    counter = {"n": 0}

    def _make(**overrides) -> Item:
        counter["n"] += 1
        fields = {
            "kind": ItemKind.RAW_MATERIAL,
            "code": f"ITEM-{counter['n']:03d}",
            "name": f"Item {counter['n']}",
            "unit_price": Decimal("2.00"),
            "available_stock": 10,
            "status": item_status,
            "supplier": supplier,
            "category": category,
            "warehouse": warehouse,
            "owner": owner,
            "attributes": {"material_type": "FABRIC"},
        }
        fields.update(overrides)
        return Item.objects.create(**fields)

    return _make
