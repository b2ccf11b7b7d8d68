"""Order routes.

    /orders/                          list, create
    /orders/{id}/                     retrieve, header update, delete
    /orders/{id}/lines/               list lines, append a line
    /orders/{id}/lines/{item_id}/     edit a line, remove a line (?position=)
"""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.orders.views import OrderViewSet

router = DefaultRouter(trailing_slash=True)
router.register("orders", OrderViewSet, basename="order")

urlpatterns = router.urls
