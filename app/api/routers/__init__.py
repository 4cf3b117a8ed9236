"""
app/api/routers package marker.
"""

from app.api.routers.inventory_export import router as inventory_export_router
from app.api.routers.inventory_import import router as inventory_import_router

__all__ = [
    "inventory_export_router",
    "inventory_import_router",
]
