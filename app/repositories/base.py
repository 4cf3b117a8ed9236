"""
Store interface consumed by the inventory import/export engine.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod

from app.domain.inventory import Category, Item, ItemRecord, Location, ValidatedItemRow


class InventoryStore(ABC):
    """
    Tenant-scoped record store for categories, locations and items.

    Write methods raise ``PersistenceError`` when one write is rejected and
    ``StoreUnavailableError`` when the store cannot be reached at all.
    """

    @abstractmethod
    def tenant_exists(self, tenant_id: uuid.UUID) -> bool:
        """
        Return True when the association exists.
        """

    @abstractmethod
    def list_categories(self, tenant_id: uuid.UUID) -> list[Category]:
        """
        Return every category of the tenant.
        """

    @abstractmethod
    def create_category(
        self,
        tenant_id: uuid.UUID,
        name: str,
        parent_id: uuid.UUID | None = None,
    ) -> Category:
        """
        Persist one category and return it.
        """

    @abstractmethod
    def list_locations(self, tenant_id: uuid.UUID) -> list[Location]:
        """
        Return every location of the tenant.
        """

    @abstractmethod
    def create_location(
        self,
        tenant_id: uuid.UUID,
        name: str,
        parent_id: uuid.UUID | None = None,
        is_room: bool = False,
    ) -> Location:
        """
        Persist one location and return it.
        """

    @abstractmethod
    def create_item(
        self,
        tenant_id: uuid.UUID,
        row: ValidatedItemRow,
        *,
        category_id: uuid.UUID,
        location_id: uuid.UUID,
    ) -> Item:
        """
        Persist one item built from a validated row and its resolved references.
        """

    @abstractmethod
    def list_items(self, tenant_id: uuid.UUID) -> list[ItemRecord]:
        """
        Return every item of the tenant with category/location names resolved.
        """
