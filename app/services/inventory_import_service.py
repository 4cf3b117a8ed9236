"""
app/services/inventory_import_service.py

Service layer for inventory CSV import orchestration.

One run moves through four phases and never revisits one:

    1. Parsing:    CSV text -> header + raw rows (ParseError aborts)
    2. Validating: header mapping, raw rows -> typed rows + row errors
    3. Resolving:  per row, in file order: category and location
                     lookup-or-create, then item creation
    4. Completed:  ImportResult with stats and every collected error

Row-level problems (validation, reference creation, item persistence) are
collected and never stop later rows. A store that cannot be reached aborts
the run with StoreUnavailableError; rows already written stay written.
"""

from __future__ import annotations

import logging
import uuid
from enum import Enum
from functools import lru_cache

from app.codecs.csv_codec import ParseError, parse
from app.config import get_inventory_import_settings
from app.domain.inventory import ImportResult, ImportStats, RowValidationError, ValidatedItemRow
from app.failure_codes import ErrorKind
from app.repositories.base import InventoryStore
from app.repositories.errors import PersistenceError, StoreUnavailableError
from app.services.reference_resolver import ReferenceResolver
from app.validators.header_validator import HeaderValidator
from app.validators.item_row_validator import ItemRowValidator

logger = logging.getLogger(__name__)


class ImportPhase(str, Enum):
    PARSING = "parsing"
    VALIDATING = "validating"
    RESOLVING = "resolving"
    COMPLETED = "completed"


class InventoryImportService:
    """
    Coordinates CSV parsing, validation, reference resolution and persistence.
    """

    def __init__(
        self,
        *,
        max_rows: int,
        log_validation_errors: bool,
        header_validator: HeaderValidator | None = None,
        validator: ItemRowValidator | None = None,
    ) -> None:
        self._max_rows = max(1, max_rows)
        self._log_validation_errors = log_validation_errors
        self._header_validator = header_validator or HeaderValidator()
        self._validator = validator or ItemRowValidator()

    def import_csv(
        self,
        *,
        store: InventoryStore,
        tenant_id: uuid.UUID,
        file_text: str,
        validate_only: bool = False,
    ) -> ImportResult:
        """
        Import inventory items for one tenant from CSV text.

        With ``validate_only`` the run parses, validates and resolves names
        against the existing records without writing anything; stats then
        report what a real import would add.

        Raises:
            ParseError:            malformed CSV, bad header or too many rows.
            StoreUnavailableError: the store could not be reached.
        """

        stats = ImportStats()
        errors: list[RowValidationError] = []

        self._enter(ImportPhase.PARSING, tenant_id)
        header, raw_rows = parse(file_text)
        if len(raw_rows) > self._max_rows:
            raise ParseError(
                f"CSV has {len(raw_rows)} data rows; at most {self._max_rows} are allowed."
            )

        self._enter(ImportPhase.VALIDATING, tenant_id)
        mapping = self._header_validator.resolve(header)
        batch = self._validator.validate_rows(rows=raw_rows, mapping=mapping)
        for error in batch.errors:
            self._record_error(errors, error)

        if batch.rows:
            self._enter(ImportPhase.RESOLVING, tenant_id)
            resolver = ReferenceResolver(
                store=store,
                tenant_id=tenant_id,
                stats=stats,
                dry_run=validate_only,
            )
            try:
                resolver.seed()
                for row in batch.rows:
                    self._process_row(
                        store=store,
                        tenant_id=tenant_id,
                        resolver=resolver,
                        row=row,
                        stats=stats,
                        errors=errors,
                        validate_only=validate_only,
                    )
            except StoreUnavailableError:
                logger.error(
                    "Inventory import aborted tenant=%s categories_added=%d "
                    "locations_added=%d items_added=%d",
                    tenant_id,
                    stats.categories_added,
                    stats.locations_added,
                    stats.items_added,
                )
                raise

        self._enter(ImportPhase.COMPLETED, tenant_id)
        errors.sort(key=lambda error: error.row_number)
        result = ImportResult(
            success=not errors,
            stats=stats,
            errors=errors,
            total_rows=len(raw_rows),
            dry_run=validate_only,
        )
        logger.info(
            "Inventory import finished tenant=%s dry_run=%s rows=%d errors=%d "
            "categories_added=%d locations_added=%d items_added=%d",
            tenant_id,
            validate_only,
            result.total_rows,
            len(errors),
            stats.categories_added,
            stats.locations_added,
            stats.items_added,
        )
        return result

    # ------------------------------------------------------------------
    # Import internals
    # ------------------------------------------------------------------

    def _process_row(
        self,
        *,
        store: InventoryStore,
        tenant_id: uuid.UUID,
        resolver: ReferenceResolver,
        row: ValidatedItemRow,
        stats: ImportStats,
        errors: list[RowValidationError],
        validate_only: bool,
    ) -> None:
        # Resolved independently: a failed category never skips the location.
        category = resolver.resolve_category(row.category_name, row_number=row.row_number)
        location = resolver.resolve_location(row.location_name, row_number=row.row_number)

        failed = [r.error for r in (category, location) if r.error is not None]
        if failed:
            for error in failed:
                self._record_error(errors, error)
            return

        if validate_only:
            stats.items_added += 1
            return

        try:
            store.create_item(
                tenant_id,
                row,
                category_id=category.reference_id,
                location_id=location.reference_id,
            )
        except PersistenceError as exc:
            self._record_error(
                errors,
                RowValidationError(
                    row_number=row.row_number,
                    message=f"Could not create item '{row.name}': {exc}",
                    column=None,
                    value=row.name,
                    kind=ErrorKind.PERSISTENCE,
                ),
            )
            return

        stats.items_added += 1

    def _record_error(
        self,
        errors: list[RowValidationError],
        error: RowValidationError,
    ) -> None:
        if self._log_validation_errors:
            logger.warning(
                "Inventory import error kind=%s row=%s column=%s message=%s value=%r",
                error.kind,
                error.row_number,
                error.column,
                error.message,
                error.value,
            )
        errors.append(error)

    @staticmethod
    def _enter(phase: ImportPhase, tenant_id: uuid.UUID) -> None:
        logger.debug("Inventory import phase=%s tenant=%s", phase.value, tenant_id)


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_inventory_import_service() -> InventoryImportService:
    """
    Build and cache the import service with env-driven settings.
    """
    settings = get_inventory_import_settings()
    return InventoryImportService(
        max_rows=settings.max_rows,
        log_validation_errors=settings.log_validation_errors,
    )
