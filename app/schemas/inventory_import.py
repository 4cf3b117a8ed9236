"""
app/schemas/inventory_import.py

Response schemas for inventory import endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ImportErrorResponse(BaseModel):
    """
    API response model for one row-level import error.
    """

    row_number: int = Field(..., ge=1)
    message: str
    kind: str
    column: str | None = None
    value: str | None = None


class ImportStatsResponse(BaseModel):
    """
    API response model for import statistics.
    """

    categories_added: int = Field(..., ge=0)
    locations_added: int = Field(..., ge=0)
    items_added: int = Field(..., ge=0)


class ImportResultResponse(BaseModel):
    """
    API response model for one inventory import run.
    """

    success: bool
    dry_run: bool = False
    total_rows: int = Field(..., ge=0)
    stats: ImportStatsResponse
    errors: list[ImportErrorResponse] = Field(default_factory=list)
