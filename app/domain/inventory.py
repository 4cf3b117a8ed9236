"""
app/domain/inventory.py

Domain models used by the inventory CSV import/export flow.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum

from app.failure_codes import ErrorKind


class ItemCondition(str, Enum):
    NEW = "new"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    DAMAGED = "damaged"
    RETIRED = "retired"


# Canonical column order for both import and export. Load-bearing: export
# output and the template header are emitted in exactly this order.
CSV_COLUMNS: tuple[str, ...] = (
    "name",
    "description",
    "serial_number",
    "barcode",
    "condition",
    "category_name",
    "location_name",
    "is_consumable",
    "quantity",
    "minimum_quantity",
    "purchase_date",
    "purchase_price",
    "warranty_expiration",
    "notes",
)

REQUIRED_CSV_COLUMNS: tuple[str, ...] = (
    "name",
    "condition",
    "category_name",
    "location_name",
)


@dataclass(frozen=True)
class RawRow:
    """
    One parsed CSV data row keyed by header name.
    """

    row_number: int
    values: dict[str, str]


@dataclass(frozen=True)
class ValidatedItemRow:
    """
    Typed inventory row ready for reference resolution and persistence.
    """

    name: str
    condition: ItemCondition
    category_name: str
    location_name: str
    is_consumable: bool = False
    description: str | None = None
    serial_number: str | None = None
    barcode: str | None = None
    quantity: int | None = None
    minimum_quantity: int | None = None
    purchase_date: date | None = None
    purchase_price: Decimal | None = None
    warranty_expiration: date | None = None
    notes: str | None = None
    row_number: int = field(default=0, compare=False)


@dataclass(frozen=True)
class Category:
    id: uuid.UUID
    name: str
    parent_id: uuid.UUID | None = None


@dataclass(frozen=True)
class Location:
    id: uuid.UUID
    name: str
    parent_id: uuid.UUID | None = None
    is_room: bool = False


@dataclass(frozen=True)
class Item:
    id: uuid.UUID
    name: str
    category_id: uuid.UUID
    location_id: uuid.UUID


@dataclass(frozen=True)
class ItemRecord:
    """
    Persisted item denormalized with human-readable category/location names.
    """

    id: uuid.UUID
    name: str
    condition: ItemCondition
    category_name: str
    location_name: str
    is_consumable: bool = False
    description: str | None = None
    serial_number: str | None = None
    barcode: str | None = None
    quantity: int | None = None
    minimum_quantity: int | None = None
    purchase_date: date | None = None
    purchase_price: Decimal | None = None
    warranty_expiration: date | None = None
    notes: str | None = None


@dataclass(frozen=True)
class RowValidationError:
    """
    One row-level problem detected during an import run.
    """

    row_number: int
    message: str
    column: str | None = None
    value: str | None = None
    kind: str = ErrorKind.VALIDATION


@dataclass(frozen=True)
class RowValidationBatch:
    """
    Validator output: typed rows plus every collected row error.
    """

    rows: list[ValidatedItemRow] = field(default_factory=list)
    errors: list[RowValidationError] = field(default_factory=list)


@dataclass
class ImportStats:
    categories_added: int = 0
    locations_added: int = 0
    items_added: int = 0


@dataclass(frozen=True)
class ImportResult:
    """
    End-of-run import result.
    """

    success: bool
    stats: ImportStats
    errors: list[RowValidationError] = field(default_factory=list)
    total_rows: int = 0
    dry_run: bool = False
