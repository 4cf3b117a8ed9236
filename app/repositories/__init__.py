"""
app/repositories package marker.
"""

from app.repositories.base import InventoryStore
from app.repositories.errors import InventoryStoreError, PersistenceError, StoreUnavailableError
from app.repositories.inventory_repository import SQLAlchemyInventoryStore

__all__ = [
    "InventoryStore",
    "InventoryStoreError",
    "PersistenceError",
    "SQLAlchemyInventoryStore",
    "StoreUnavailableError",
]
