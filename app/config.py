"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from db.config import get_bool_env, get_int_env

DEFAULT_MAX_ROWS = 5000
DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024


@dataclass(frozen=True)
class InventoryImportSettings:
    """
    Runtime settings for inventory CSV import.
    """

    max_rows: int = DEFAULT_MAX_ROWS
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    log_validation_errors: bool = True


@lru_cache(maxsize=1)
def get_inventory_import_settings() -> InventoryImportSettings:
    """
    Return cached inventory import settings from environment variables.
    """

    return InventoryImportSettings(
        max_rows=max(1, get_int_env("INVENTORY_IMPORT_MAX_ROWS", DEFAULT_MAX_ROWS)),
        max_upload_bytes=max(
            1, get_int_env("INVENTORY_IMPORT_MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES)
        ),
        log_validation_errors=get_bool_env("INVENTORY_IMPORT_LOG_VALIDATION_ERRORS", True),
    )
