from django.apps import AppConfig


class OrdersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.orders"
    label = "orders"

    def ready(self) -> None:
        from modules.orders.events import (
            OrderCreated,
            OrderDeleted,
            OrderHeaderUpdated,
        )
        from modules.orders.handlers import (
            order_created_handler,
            order_deleted_handler,
            order_header_updated_handler,
        )
        from shared.infrastructure.bus import event_bus

        event_bus.subscribe(OrderCreated, order_created_handler)
        event_bus.subscribe(OrderHeaderUpdated, order_header_updated_handler)
        event_bus.subscribe(OrderDeleted, order_deleted_handler)
