"""Order aggregate repositories (order header plus its ordered lines)."""

from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.repositories.interfaces import IOrderRepository, LineSpec

__all__ = ["IOrderRepository", "LineSpec", "OrderDjangoRepository"]
