"""
app/schemas package marker.
"""

from app.schemas.health import HealthResponse
from app.schemas.inventory_import import (
    ImportErrorResponse,
    ImportResultResponse,
    ImportStatsResponse,
)

__all__ = [
    "HealthResponse",
    "ImportErrorResponse",
    "ImportResultResponse",
    "ImportStatsResponse",
]
