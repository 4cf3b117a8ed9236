"""
app/services/reference_resolver.py

Lookup-or-create resolution of category and location names for one import run.

The resolver loads every existing category and location of the tenant once
(one read per entity kind) into run-scoped caches keyed by normalized name.
A cache miss creates the entity and caches the result, so a name is created
at most once per run no matter how many rows mention it or how it is cased.
A failed creation is cached as well and reported again, without a new create
call, for later rows with the same name.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from app.domain.inventory import Category, ImportStats, Location, RowValidationError
from app.failure_codes import ErrorKind
from app.repositories.base import InventoryStore
from app.repositories.errors import PersistenceError

logger = logging.getLogger(__name__)


def normalize_name(name: str) -> str:
    return name.strip().lower()


@dataclass(frozen=True)
class ReferenceResolution:
    """
    Outcome of resolving one name for one row.

    ``reference_id`` is None on failure and for planned creations in dry runs.
    """

    reference_id: uuid.UUID | None
    error: RowValidationError | None = None

    @property
    def resolved(self) -> bool:
        return self.error is None


class ReferenceCache:
    """
    Normalized name -> id mapping for one entity kind within one run.
    """

    def __init__(self) -> None:
        self._ids: dict[str, uuid.UUID | None] = {}
        self._failures: dict[str, str] = {}

    def seed(self, entities: Iterable[Category | Location]) -> None:
        """
        Load stored entities. Top-level entities win over nested ones that
        share a normalized name; otherwise the first listed wins.
        """

        top_level: set[str] = set()
        for entity in entities:
            key = normalize_name(entity.name)
            if not key:
                continue
            is_top_level = entity.parent_id is None
            if key in self._ids and (key in top_level or not is_top_level):
                continue
            self._ids[key] = entity.id
            if is_top_level:
                top_level.add(key)

    def __contains__(self, key: str) -> bool:
        return key in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def get(self, key: str) -> uuid.UUID | None:
        return self._ids.get(key)

    def add(self, key: str, entity_id: uuid.UUID | None) -> None:
        self._ids[key] = entity_id

    def failure(self, key: str) -> str | None:
        return self._failures.get(key)

    def add_failure(self, key: str, message: str) -> None:
        self._failures[key] = message


class ReferenceResolver:
    """
    Resolves category/location names to persisted ids for one tenant and run.

    Never share an instance across runs: its caches belong to a single import.
    """

    def __init__(
        self,
        *,
        store: InventoryStore,
        tenant_id: uuid.UUID,
        stats: ImportStats,
        dry_run: bool = False,
    ) -> None:
        self._store = store
        self._tenant_id = tenant_id
        self._stats = stats
        self._dry_run = dry_run
        self._categories = ReferenceCache()
        self._locations = ReferenceCache()

    def seed(self) -> None:
        """
        Load existing categories and locations. Store errors propagate.
        """

        self._categories.seed(self._store.list_categories(self._tenant_id))
        self._locations.seed(self._store.list_locations(self._tenant_id))
        logger.info(
            "Reference cache seeded tenant=%s categories=%d locations=%d",
            self._tenant_id,
            len(self._categories),
            len(self._locations),
        )

    def resolve_category(self, name: str, *, row_number: int) -> ReferenceResolution:
        return self._resolve(
            kind="category",
            column="category_name",
            cache=self._categories,
            name=name,
            row_number=row_number,
            create=lambda clean_name: self._store.create_category(self._tenant_id, clean_name).id,
            on_created=self._count_category,
        )

    def resolve_location(self, name: str, *, row_number: int) -> ReferenceResolution:
        return self._resolve(
            kind="location",
            column="location_name",
            cache=self._locations,
            name=name,
            row_number=row_number,
            create=lambda clean_name: self._store.create_location(
                self._tenant_id, clean_name, None, False
            ).id,
            on_created=self._count_location,
        )

    def _resolve(
        self,
        *,
        kind: str,
        column: str,
        cache: ReferenceCache,
        name: str,
        row_number: int,
        create: Callable[[str], uuid.UUID],
        on_created: Callable[[], None],
    ) -> ReferenceResolution:
        clean_name = name.strip()
        key = normalize_name(clean_name)

        if key in cache:
            return ReferenceResolution(reference_id=cache.get(key))

        previous_failure = cache.failure(key)
        if previous_failure is not None:
            return ReferenceResolution(
                reference_id=None,
                error=self._creation_error(row_number, column, clean_name, previous_failure),
            )

        if self._dry_run:
            cache.add(key, None)
            on_created()
            return ReferenceResolution(reference_id=None)

        try:
            entity_id = create(clean_name)
        except PersistenceError as exc:
            message = f"Could not create {kind} '{clean_name}': {exc}"
            cache.add_failure(key, message)
            logger.warning(
                "Reference creation failed tenant=%s kind=%s name=%r row=%s: %s",
                self._tenant_id,
                kind,
                clean_name,
                row_number,
                exc,
            )
            return ReferenceResolution(
                reference_id=None,
                error=self._creation_error(row_number, column, clean_name, message),
            )

        cache.add(key, entity_id)
        on_created()
        logger.info(
            "Created %s tenant=%s name=%r id=%s row=%s",
            kind,
            self._tenant_id,
            clean_name,
            entity_id,
            row_number,
        )
        return ReferenceResolution(reference_id=entity_id)

    def _count_category(self) -> None:
        self._stats.categories_added += 1

    def _count_location(self) -> None:
        self._stats.locations_added += 1

    @staticmethod
    def _creation_error(
        row_number: int,
        column: str,
        name: str,
        message: str,
    ) -> RowValidationError:
        return RowValidationError(
            row_number=row_number,
            column=column,
            message=message,
            value=name,
            kind=ErrorKind.REFERENCE_CREATION,
        )
