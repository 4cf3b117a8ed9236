"""
tests/test_inventory_repository.py

SQLAlchemyInventoryStore against an in-memory SQLite database.
"""

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from app.codecs.csv_codec import serialize
from app.domain.inventory import CSV_COLUMNS, ItemCondition, ValidatedItemRow
from app.repositories.errors import PersistenceError, StoreUnavailableError
from app.repositories.inventory_repository import SQLAlchemyInventoryStore
from app.services.inventory_export_service import export_items
from app.services.inventory_import_service import InventoryImportService
from db.models import Association, InventoryItem


@pytest.fixture()
def association(db_session) -> Association:
    record = Association(name="Student Radio")
    db_session.add(record)
    db_session.flush()
    return record


@pytest.fixture()
def store(db_session) -> SQLAlchemyInventoryStore:
    return SQLAlchemyInventoryStore(db_session)


def _row(name: str = "Mixer", **overrides) -> ValidatedItemRow:
    values = dict(
        name=name,
        condition=ItemCondition.GOOD,
        category_name="Audio",
        location_name="Storage A",
    )
    values.update(overrides)
    return ValidatedItemRow(**values)


def test_tenant_exists(store, association) -> None:
    assert store.tenant_exists(association.id)
    assert not store.tenant_exists(uuid.uuid4())


def test_created_references_are_listed_per_tenant(store, association, db_session) -> None:
    other = Association(name="Chess Club")
    db_session.add(other)
    db_session.flush()

    category = store.create_category(association.id, "Audio")
    store.create_category(other.id, "Boards")
    location = store.create_location(association.id, "Hall", is_room=True)

    assert [c.id for c in store.list_categories(association.id)] == [category.id]
    listed = store.list_locations(association.id)
    assert [(loc.id, loc.name, loc.is_room, loc.parent_id) for loc in listed] == [
        (location.id, "Hall", True, None)
    ]


def test_create_item_and_list_with_reference_names(store, association) -> None:
    category = store.create_category(association.id, "Audio")
    location = store.create_location(association.id, "Storage A")

    item = store.create_item(
        association.id,
        _row(
            "Cable",
            is_consumable=True,
            quantity=10,
            purchase_date=date(2024, 1, 15),
            purchase_price=Decimal("9.50"),
        ),
        category_id=category.id,
        location_id=location.id,
    )
    store.create_item(association.id, _row("Mixer"), category_id=category.id, location_id=location.id)

    records = store.list_items(association.id)
    assert [r.name for r in records] == ["Cable", "Mixer"]
    assert records[0].id == item.id
    assert records[0].category_name == "Audio"
    assert records[0].location_name == "Storage A"
    assert records[0].condition == ItemCondition.GOOD
    assert records[0].quantity == 10
    assert records[0].purchase_date == date(2024, 1, 15)
    assert records[0].purchase_price == Decimal("9.50")


def test_rejected_write_leaves_session_usable(store, association, db_session) -> None:
    category = store.create_category(association.id, "Audio")

    with pytest.raises(PersistenceError):
        store.create_item(
            association.id,
            _row(),
            category_id=category.id,
            location_id=uuid.uuid4(),
        )

    location = store.create_location(association.id, "Hall")
    store.create_item(association.id, _row(), category_id=category.id, location_id=location.id)
    assert db_session.query(InventoryItem).count() == 1


def test_duplicate_nested_name_is_rejected_ignoring_case(store, association) -> None:
    parent = store.create_category(association.id, "Equipment")
    store.create_category(association.id, "Audio", parent_id=parent.id)

    with pytest.raises(PersistenceError):
        store.create_category(association.id, "AUDIO", parent_id=parent.id)


def test_connection_failure_maps_to_store_unavailable(store, association, db_session) -> None:
    failure = OperationalError("SELECT 1", {}, Exception("server closed the connection"))

    with patch.object(db_session, "execute", side_effect=failure):
        with pytest.raises(StoreUnavailableError):
            store.list_categories(association.id)


# ---------------------------------------------------------------------------
# Import and export through the database
# ---------------------------------------------------------------------------


def _csv(*rows: dict) -> str:
    base = {"condition": "good", "category_name": "Audio", "location_name": "Storage A"}
    return serialize(CSV_COLUMNS, [{**base, **row} for row in rows])


@pytest.fixture()
def import_service() -> InventoryImportService:
    return InventoryImportService(max_rows=10, log_validation_errors=False)


def test_export_then_import_round_trips_through_the_database(
    store, association, db_session, import_service
) -> None:
    target = Association(name="Film Society")
    db_session.add(target)
    db_session.flush()
    text = _csv(
        {"name": "Mixer", "purchase_price": "149.99", "purchase_date": "2024-01-15"},
        {"name": "Stand", "purchase_price": "19.5", "description": 'Tall, "heavy"'},
        {"name": "Gaffer tape", "is_consumable": "true", "quantity": "12", "minimum_quantity": "3"},
    )

    first = import_service.import_csv(store=store, tenant_id=association.id, file_text=text)
    exported = export_items(store.list_items(association.id))
    second = import_service.import_csv(store=store, tenant_id=target.id, file_text=exported)

    assert first.success and second.success
    assert second.stats.items_added == 3
    assert export_items(store.list_items(target.id)) == exported
    prices = {r.name: r.purchase_price for r in store.list_items(target.id)}
    assert prices["Mixer"] == Decimal("149.99")
    assert prices["Stand"] == Decimal("19.50")


def test_price_beyond_column_scale_is_reported_not_rounded(
    store, association, db_session, import_service
) -> None:
    result = import_service.import_csv(
        store=store,
        tenant_id=association.id,
        file_text=_csv({"name": "Mixer", "purchase_price": "19.999"}),
    )

    assert not result.success
    assert [(e.row_number, e.column) for e in result.errors] == [(1, "purchase_price")]
    assert db_session.query(InventoryItem).count() == 0


def test_header_with_trailing_empty_cells_imports(store, association, import_service) -> None:
    text = ",".join(CSV_COLUMNS) + ",,\r\n" + _csv({"name": "Mixer"}).splitlines()[1] + ",,\r\n"

    result = import_service.import_csv(store=store, tenant_id=association.id, file_text=text)

    assert result.success
    assert [r.name for r in store.list_items(association.id)] == ["Mixer"]
