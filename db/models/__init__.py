"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.association import Association
from db.models.inventory_category import InventoryCategory
from db.models.inventory_item import InventoryItem
from db.models.inventory_location import InventoryLocation

__all__ = [
    "Association",
    "InventoryCategory",
    "InventoryItem",
    "InventoryLocation",
]
