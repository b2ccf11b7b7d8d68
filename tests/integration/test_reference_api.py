"""Integration tests for DELETE /api/v1/references/{kind}/{id}/."""

from __future__ import annotations

from uuid import uuid4

import pytest

from modules.catalog.models import Category, Warehouse
from modules.statuses.models import StatusCategory, StatusValue

pytestmark = pytest.mark.integration


def _url(kind, entity_id):
    return f"/api/v1/references/{kind}/{entity_id}/"


class TestReferenceDeletion:
    def test_status_in_use_then_freed(self, auth_client):
        status = StatusValue.objects.create(category=StatusCategory.ACTIVE, label="ACTIVE")
        warehouse = Warehouse.objects.create(name="South", status=status)

        blocked = auth_client.delete(_url("status", status.id))

        assert blocked.status_code == 409
        error = blocked.json()["errors"][0]
        assert error["code"] == "resource_in_use"
        assert error["meta"]["blocking_dependent_kind"] == "warehouse"
        assert error["meta"]["kind"] == "status"

        assert auth_client.delete(_url("warehouse", warehouse.id)).status_code == 204
        assert auth_client.delete(_url("status", status.id)).status_code == 204
        assert not StatusValue.objects.filter(pk=status.pk).exists()

    def test_unknown_id(self, auth_client):
        response = auth_client.delete(_url("category", uuid4()))
        assert response.status_code == 404
        assert response.json()["errors"][0]["code"] == "not_found"

    def test_unknown_kind(self, auth_client):
        response = auth_client.delete(_url("order", uuid4()))
        assert response.status_code == 400
        assert response.json()["errors"][0]["code"] == "invalid_data"

    def test_item_on_open_order(self, auth_client, make_item, pending_status):
        item = make_item()
        auth_client.post(
            "/api/v1/orders/",
            {
                "status_id": str(pending_status.id),
                "lines": [{"item_id": str(item.id), "quantity": 1, "unit_price": "2.00"}],
            },
            format="json",
        )

        response = auth_client.delete(_url("item", item.id))

        assert response.status_code == 409
        assert response.json()["errors"][0]["meta"]["blocking_dependent_kind"] == "order_line"

    def test_requires_authentication(self, api_client):
        category = Category.objects.create(name="Locked")
        assert api_client.delete(_url("category", category.id)).status_code == 401
        assert Category.objects.filter(pk=category.pk).exists()
