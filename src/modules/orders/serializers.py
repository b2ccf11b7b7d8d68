"""Order DRF serializers for API input/output.

Input serializers only check shape and types.  Quantity and price
rules, status category and stock live in ``OrderService`` so that API
and service callers get the same ``InvalidOrder`` errors.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.models import Order, OrderLine

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class OrderLineInputSerializer(serializers.Serializer):
    item_id = serializers.UUIDField()
    quantity = serializers.IntegerField()
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2)


class CreateOrderSerializer(serializers.Serializer):
    status_id = serializers.UUIDField()
    client_id = serializers.UUIDField(required=False, allow_null=True, default=None)
    lines = OrderLineInputSerializer(many=True, allow_empty=True)
    notes = serializers.CharField(required=False, default="", allow_blank=True)


class UpdateOrderHeaderSerializer(serializers.Serializer):
    status_id = serializers.UUIDField()
    client_id = serializers.UUIDField(required=False, allow_null=True, default=None)


class UpdateOrderLineSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(required=False)
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    position = serializers.IntegerField(required=False, min_value=1)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class OrderLineSerializer(serializers.ModelSerializer):
    item_code = serializers.CharField(source="item.code", read_only=True, default=None)
    subtotal = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta:
        model = OrderLine
        fields = [
            "position",
            "item_id",
            "item_code",
            "quantity",
            "unit_price",
            "subtotal",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders with nested lines and derived total."""

    status = serializers.CharField(source="status.label", read_only=True)
    lines = OrderLineSerializer(many=True, read_only=True)
    total = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "placed_at",
            "closed_at",
            "client_id",
            "status_id",
            "status",
            "notes",
            "total",
            "lines",
        ]
        read_only_fields = fields


class OrderListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for order lists (no nested lines)."""

    status = serializers.CharField(source="status.label", read_only=True)
    total = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta:
        model = Order
        fields = ["id", "placed_at", "closed_at", "client_id", "status", "total"]
        read_only_fields = fields
