"""
app/services/inventory_export_service.py

Inventory CSV export and import template generation.

Export is the mirror image of import: items already carry their category and
location names, so no reference resolution happens here. Columns are always
emitted in the canonical order of ``CSV_COLUMNS``.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from enum import Enum
from functools import lru_cache
from typing import Any

from app.codecs.csv_codec import serialize
from app.domain.inventory import CSV_COLUMNS, ItemRecord
from app.repositories.base import InventoryStore

logger = logging.getLogger(__name__)


# The example row must pass import validation unmodified.
TEMPLATE_EXAMPLE_ROW: dict[str, str] = {
    "name": "Wireless Microphone",
    "description": "Handheld vocal microphone",
    "serial_number": "SN-12345",
    "barcode": "BC-12345",
    "condition": "good",
    "category_name": "Audio",
    "location_name": "Storage A",
    "is_consumable": "false",
    "quantity": "",
    "minimum_quantity": "",
    "purchase_date": "2024-01-15",
    "purchase_price": "149.99",
    "warranty_expiration": "2026-01-15",
    "notes": "Check batteries before each event",
}


def _format_value(value: Any) -> str | None:
    """Render one typed value the way the import validator reads it back."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


def item_to_row(item: ItemRecord) -> dict[str, str | None]:
    """
    Flatten one item into a canonical column -> text mapping.
    """
    return {column: _format_value(getattr(item, column)) for column in CSV_COLUMNS}


def export_items(items: Iterable[ItemRecord]) -> str:
    """
    Serialize denormalized items as inventory CSV text.
    """
    return serialize(CSV_COLUMNS, (item_to_row(item) for item in items))


def generate_template() -> str:
    """
    Return the canonical header plus one illustrative example row.
    """
    return serialize(CSV_COLUMNS, [TEMPLATE_EXAMPLE_ROW])


class InventoryExportService:
    """
    Loads a tenant's items from the store and renders them as CSV.

    Read-only; the caller owns the session lifecycle.
    """

    def export_tenant(self, store: InventoryStore, tenant_id: uuid.UUID) -> str:
        items = store.list_items(tenant_id)
        logger.info("Inventory export tenant=%s items=%d", tenant_id, len(items))
        return export_items(items)


@lru_cache(maxsize=1)
def get_inventory_export_service() -> InventoryExportService:
    return InventoryExportService()
