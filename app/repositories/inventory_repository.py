"""
app/repositories/inventory_repository.py

SQLAlchemy implementation of the inventory store.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import select
from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session

from app.domain.inventory import (
    Category,
    Item,
    ItemCondition,
    ItemRecord,
    Location,
    ValidatedItemRow,
)
from app.repositories.base import InventoryStore
from app.repositories.errors import PersistenceError, StoreUnavailableError
from db.models import Association, InventoryCategory, InventoryItem, InventoryLocation


def _is_unavailable(exc: SQLAlchemyError) -> bool:
    if isinstance(exc, PoolTimeoutError):
        return True
    if isinstance(exc, DBAPIError):
        return exc.connection_invalidated or isinstance(exc, (OperationalError, InterfaceError))
    return False


class SQLAlchemyInventoryStore(InventoryStore):
    """
    Inventory store over one SQLAlchemy session.

    Every write runs inside its own SAVEPOINT so a rejected row leaves the
    surrounding transaction usable. The caller owns commit/rollback.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def tenant_exists(self, tenant_id: uuid.UUID) -> bool:
        with self._translate_errors("load association"):
            return self._session.get(Association, tenant_id) is not None

    def list_categories(self, tenant_id: uuid.UUID) -> list[Category]:
        stmt = (
            select(InventoryCategory)
            .where(InventoryCategory.association_id == tenant_id)
            .order_by(InventoryCategory.created_at, InventoryCategory.name)
        )
        with self._translate_errors("list categories"):
            records = self._session.execute(stmt).scalars().all()
        return [Category(id=r.id, name=r.name, parent_id=r.parent_id) for r in records]

    def create_category(
        self,
        tenant_id: uuid.UUID,
        name: str,
        parent_id: uuid.UUID | None = None,
    ) -> Category:
        record = InventoryCategory(association_id=tenant_id, name=name, parent_id=parent_id)
        self._write(record, action="create category")
        return Category(id=record.id, name=record.name, parent_id=record.parent_id)

    def list_locations(self, tenant_id: uuid.UUID) -> list[Location]:
        stmt = (
            select(InventoryLocation)
            .where(InventoryLocation.association_id == tenant_id)
            .order_by(InventoryLocation.created_at, InventoryLocation.name)
        )
        with self._translate_errors("list locations"):
            records = self._session.execute(stmt).scalars().all()
        return [
            Location(id=r.id, name=r.name, parent_id=r.parent_id, is_room=r.is_room)
            for r in records
        ]

    def create_location(
        self,
        tenant_id: uuid.UUID,
        name: str,
        parent_id: uuid.UUID | None = None,
        is_room: bool = False,
    ) -> Location:
        record = InventoryLocation(
            association_id=tenant_id,
            name=name,
            parent_id=parent_id,
            is_room=is_room,
        )
        self._write(record, action="create location")
        return Location(
            id=record.id,
            name=record.name,
            parent_id=record.parent_id,
            is_room=record.is_room,
        )

    def create_item(
        self,
        tenant_id: uuid.UUID,
        row: ValidatedItemRow,
        *,
        category_id: uuid.UUID,
        location_id: uuid.UUID,
    ) -> Item:
        record = InventoryItem(
            association_id=tenant_id,
            category_id=category_id,
            location_id=location_id,
            name=row.name,
            description=row.description,
            serial_number=row.serial_number,
            barcode=row.barcode,
            condition=row.condition.value,
            is_consumable=row.is_consumable,
            quantity=row.quantity,
            minimum_quantity=row.minimum_quantity,
            purchase_date=row.purchase_date,
            purchase_price=row.purchase_price,
            warranty_expiration=row.warranty_expiration,
            notes=row.notes,
        )
        self._write(record, action="create item")
        return Item(
            id=record.id,
            name=record.name,
            category_id=record.category_id,
            location_id=record.location_id,
        )

    def list_items(self, tenant_id: uuid.UUID) -> list[ItemRecord]:
        stmt = (
            select(InventoryItem, InventoryCategory.name, InventoryLocation.name)
            .join(InventoryCategory, InventoryItem.category_id == InventoryCategory.id)
            .join(InventoryLocation, InventoryItem.location_id == InventoryLocation.id)
            .where(InventoryItem.association_id == tenant_id)
            .order_by(InventoryItem.created_at, InventoryItem.name, InventoryItem.id)
        )
        with self._translate_errors("list items"):
            results = self._session.execute(stmt).all()

        return [
            ItemRecord(
                id=item.id,
                name=item.name,
                condition=ItemCondition(item.condition),
                category_name=category_name,
                location_name=location_name,
                is_consumable=item.is_consumable,
                description=item.description,
                serial_number=item.serial_number,
                barcode=item.barcode,
                quantity=item.quantity,
                minimum_quantity=item.minimum_quantity,
                purchase_date=item.purchase_date,
                purchase_price=item.purchase_price,
                warranty_expiration=item.warranty_expiration,
                notes=item.notes,
            )
            for item, category_name, location_name in results
        ]

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _write(self, record: object, *, action: str) -> None:
        with self._translate_errors(action):
            with self._session.begin_nested():
                self._session.add(record)
                self._session.flush()

    @contextmanager
    def _translate_errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            if _is_unavailable(exc):
                raise StoreUnavailableError(f"Inventory store unavailable during {action}.") from exc
            detail = getattr(exc, "orig", None) or exc
            raise PersistenceError(f"{action} rejected: {detail}") from exc
