"""Order API views.

Exposes ``OrderService`` over HTTP with a DRF ``GenericViewSet``.  The
view only parses input and serializes output; domain errors propagate
to ``modules.core.exception_handler``.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.filters import OrderingFilter
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import GenericViewSet

from modules.core.pagination import StandardResultsSetPagination
from modules.core.unit_of_work import DjangoUnitOfWork
from modules.orders.dtos import (
    CreateOrderDTO,
    OrderLineDTO,
    UpdateOrderHeaderDTO,
    UpdateOrderLineDTO,
)
from modules.orders.filters import OrderFilter
from modules.orders.models import Order
from modules.orders.serializers import (
    CreateOrderSerializer,
    OrderLineInputSerializer,
    OrderLineSerializer,
    OrderListSerializer,
    OrderSerializer,
    UpdateOrderHeaderSerializer,
    UpdateOrderLineSerializer,
)
from modules.orders.services import OrderService


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Does **not** extend ``ModelViewSet``: writes go through
    ``OrderService`` and its unit of work.
    """

    queryset = Order.objects.none()
    filterset_class = OrderFilter
    ordering_fields = ["placed_at", "closed_at"]
    ordering = ["-placed_at", "-id"]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    pagination_class = StandardResultsSetPagination
    throttle_scopes = {
        "create": "order_creation",
        "list": "order_listing",
        "retrieve": "order_listing",
    }

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(DjangoUnitOfWork())

    def get_throttles(self) -> list[BaseThrottle]:
        self.throttle_scope = self.throttle_scopes.get(self.action)
        return super().get_throttles()

    def get_queryset(self):
        return Order.objects.select_related("status", "client").prefetch_related("lines")

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/"""
        serializer = CreateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        dto = CreateOrderDTO(
            status_id=data["status_id"],
            client_id=data.get("client_id"),
            lines=[OrderLineDTO(**line) for line in data["lines"]],
            notes=data.get("notes", ""),
        )
        order = self._service.create_order(dto)
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/?status=&client=&placed_from=&placed_to="""
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        serializer = OrderListSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        order = self._service.get_order(pk)
        return Response(OrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Header update / delete
    # ------------------------------------------------------------------

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/orders/{pk}/  (status and client)"""
        serializer = UpdateOrderHeaderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = self._service.update_header(
            pk, UpdateOrderHeaderDTO(**serializer.validated_data)
        )
        return Response(OrderSerializer(order).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/orders/{pk}/"""
        self._service.delete_order(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ------------------------------------------------------------------
    # Lines
    # ------------------------------------------------------------------

    @action(detail=True, methods=["post"], url_path="lines")
    def add_line(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/orders/{pk}/lines/"""
        serializer = OrderLineInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        line = self._service.add_line(pk, OrderLineDTO(**serializer.validated_data))
        return Response(OrderLineSerializer(line).data, status=status.HTTP_201_CREATED)

    @add_line.mapping.get
    def list_lines(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/lines/"""
        lines = self._service.list_lines(pk)
        return Response(OrderLineSerializer(lines, many=True).data)

    @action(detail=True, methods=["patch"], url_path=r"lines/(?P<item_id>[^/.]+)")
    def update_line(
        self, request: Request, pk: str | None = None, item_id: str | None = None
    ) -> Response:
        """PATCH /api/v1/orders/{pk}/lines/{item_id}/

        Changes quantity and/or price only; stock is not reconciled.
        """
        serializer = UpdateOrderLineSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        line = self._service.update_line(
            pk, item_id, UpdateOrderLineDTO(**serializer.validated_data)
        )
        return Response(OrderLineSerializer(line).data)

    @update_line.mapping.delete
    def remove_line(
        self, request: Request, pk: str | None = None, item_id: str | None = None
    ) -> Response:
        """DELETE /api/v1/orders/{pk}/lines/{item_id}/?position=

        The line's quantity goes back to the item's stock.
        """
        position = _position_param(request)
        self._service.remove_line(pk, item_id, position)
        return Response(status=status.HTTP_204_NO_CONTENT)


def _position_param(request: Request) -> int | None:
    raw = request.query_params.get("position")
    if raw in (None, ""):
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError({"position": ["A valid integer is required."]}) from None
