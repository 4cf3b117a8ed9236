"""
app/api/routers/inventory_import.py

Inventory CSV import HTTP endpoint.
"""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, UploadFile, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.dependencies import get_csv_upload, get_inventory_store, read_csv_text
from app.codecs.csv_codec import ParseError
from app.config import InventoryImportSettings, get_inventory_import_settings
from app.repositories.base import InventoryStore
from app.repositories.errors import InventoryStoreError, StoreUnavailableError
from app.schemas.inventory_import import (
    ImportErrorResponse,
    ImportResultResponse,
    ImportStatsResponse,
)
from app.services.inventory_import_service import (
    InventoryImportService,
    get_inventory_import_service,
)
from app.validators.header_validator import CSVHeaderError
from db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["inventory"])


@router.post(
    "/associations/{association_id}/inventory/import",
    response_model=ImportResultResponse,
)
def import_inventory(
    association_id: uuid.UUID,
    validate_only: bool = Query(
        default=False,
        description="Validate and resolve references without writing anything",
    ),
    file: UploadFile = Depends(get_csv_upload),
    db: Session = Depends(get_db),
    store: InventoryStore = Depends(get_inventory_store),
    import_service: InventoryImportService = Depends(get_inventory_import_service),
    settings: InventoryImportSettings = Depends(get_inventory_import_settings),
) -> ImportResultResponse:
    """
    Import inventory items for one association from a CSV file.
    """

    try:
        if not store.tenant_exists(association_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Association not found.",
            )
        file_text = read_csv_text(file, max_bytes=settings.max_upload_bytes)
        result = import_service.import_csv(
            store=store,
            tenant_id=association_id,
            file_text=file_text,
            validate_only=validate_only,
        )
    except CSVHeaderError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=exc.to_dict(),
        ) from exc
    except ParseError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except StoreUnavailableError as exc:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Inventory store is unavailable; import aborted.",
        ) from exc
    except InventoryStoreError as exc:
        db.rollback()
        logger.exception("Inventory import failed association=%s", association_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Inventory import failed.",
        ) from exc
    finally:
        file.file.close()

    if validate_only:
        db.rollback()
    else:
        try:
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Unable to commit imported inventory.",
            ) from exc

    return ImportResultResponse(
        success=result.success,
        dry_run=result.dry_run,
        total_rows=result.total_rows,
        stats=ImportStatsResponse(
            categories_added=result.stats.categories_added,
            locations_added=result.stats.locations_added,
            items_added=result.stats.items_added,
        ),
        errors=[
            ImportErrorResponse(
                row_number=error.row_number,
                message=error.message,
                kind=error.kind,
                column=error.column,
                value=error.value,
            )
            for error in result.errors
        ],
    )
