"""
app/domain package marker.
"""

from app.domain.inventory import (
    CSV_COLUMNS,
    REQUIRED_CSV_COLUMNS,
    Category,
    ImportResult,
    ImportStats,
    Item,
    ItemCondition,
    ItemRecord,
    Location,
    RawRow,
    RowValidationBatch,
    RowValidationError,
    ValidatedItemRow,
)

__all__ = [
    "CSV_COLUMNS",
    "REQUIRED_CSV_COLUMNS",
    "Category",
    "ImportResult",
    "ImportStats",
    "Item",
    "ItemCondition",
    "ItemRecord",
    "Location",
    "RawRow",
    "RowValidationBatch",
    "RowValidationError",
    "ValidatedItemRow",
]
