"""
app/services package marker.
"""

from app.services.inventory_export_service import (
    InventoryExportService,
    export_items,
    generate_template,
    get_inventory_export_service,
)
from app.services.inventory_import_service import (
    InventoryImportService,
    get_inventory_import_service,
)
from app.services.reference_resolver import ReferenceResolver

__all__ = [
    "InventoryExportService",
    "export_items",
    "generate_template",
    "get_inventory_export_service",
    "InventoryImportService",
    "get_inventory_import_service",
    "ReferenceResolver",
]
