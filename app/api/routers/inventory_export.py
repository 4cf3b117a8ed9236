"""
app/api/routers/inventory_export.py

Inventory CSV export and template download endpoints.

GET /associations/{association_id}/inventory/export
GET /inventory/template

Both respond with ``text/csv`` attachments in the canonical column order.
"""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response

from app.api.dependencies import get_inventory_store
from app.repositories.base import InventoryStore
from app.repositories.errors import InventoryStoreError, StoreUnavailableError
from app.services.inventory_export_service import (
    InventoryExportService,
    generate_template,
    get_inventory_export_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["inventory"])


def _csv_attachment(content: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/associations/{association_id}/inventory/export", summary="Export inventory as CSV")
def export_inventory(
    association_id: uuid.UUID,
    store: InventoryStore = Depends(get_inventory_store),
    service: InventoryExportService = Depends(get_inventory_export_service),
) -> Response:
    try:
        if not store.tenant_exists(association_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Association not found.",
            )
        content = service.export_tenant(store, association_id)
    except StoreUnavailableError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Inventory store is unavailable.",
        ) from exc
    except InventoryStoreError as exc:
        logger.exception("Inventory export failed association=%s", association_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Export failed; see server logs for details.",
        ) from exc

    return _csv_attachment(content, "inventory_export.csv")


@router.get("/inventory/template", summary="Download the inventory import template")
def download_template() -> Response:
    return _csv_attachment(generate_template(), "inventory_template.csv")
