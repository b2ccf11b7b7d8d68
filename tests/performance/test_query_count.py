"""Performance regression tests: constant query count (N+1 prevention).

Verifies that list and retrieve endpoints execute a bounded number of
SQL queries regardless of the number of orders and lines, proving that
``select_related`` / ``prefetch_related`` are correctly applied.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.orders.models import Order, OrderLine


@pytest.fixture()
def orders_with_lines(pending_status, internal_client, make_item):
    items = [make_item(available_stock=1000) for _ in range(3)]
    orders = []
    for _ in range(10):
        order = Order.objects.create(status=pending_status, client=internal_client)
        for position, item in enumerate(items, start=1):
            OrderLine.objects.create(
                order=order,
                item=item,
                position=position,
                quantity=1,
                unit_price=Decimal("10.00"),
            )
        orders.append(order)
    return orders


class TestOrderListQueryCount:
    def test_list_query_count_is_constant(
        self, auth_client, orders_with_lines, django_assert_max_num_queries
    ):
        """COUNT for pagination, orders joined with status, prefetched lines."""
        with django_assert_max_num_queries(4):
            response = auth_client.get("/api/v1/orders/")

        assert response.status_code == 200
        assert response.data["count"] == 10
        assert response.data["results"][0]["total"] == "30.00"


class TestOrderRetrieveQueryCount:
    def test_retrieve_query_count_is_constant(
        self, auth_client, orders_with_lines, django_assert_max_num_queries
    ):
        """Order joined with status and client, then lines, then their items."""
        order = orders_with_lines[0]

        with django_assert_max_num_queries(4):
            response = auth_client.get(f"/api/v1/orders/{order.id}/")

        assert response.status_code == 200
        assert len(response.data["lines"]) == 3
        assert all(line["item_code"] for line in response.data["lines"])
