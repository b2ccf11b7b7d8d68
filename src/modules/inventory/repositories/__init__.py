"""Item repositories package."""

from modules.inventory.repositories.django_repository import ItemDjangoRepository

__all__ = ["ItemDjangoRepository"]
