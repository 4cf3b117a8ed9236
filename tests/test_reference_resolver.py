"""
tests/test_reference_resolver.py

Pytest unit tests for ReferenceResolver lookup-or-create behaviour.
"""

from __future__ import annotations

import random
import uuid

import pytest

from app.domain.inventory import Category, ImportStats, Location
from app.failure_codes import ErrorKind
from app.repositories.errors import StoreUnavailableError
from app.services.reference_resolver import ReferenceCache, ReferenceResolver, normalize_name


def _resolver(store, tenant_id, stats=None, dry_run=False) -> ReferenceResolver:
    resolver = ReferenceResolver(
        store=store,
        tenant_id=tenant_id,
        stats=stats if stats is not None else ImportStats(),
        dry_run=dry_run,
    )
    resolver.seed()
    return resolver


def _variants(name: str, seed: int, count: int) -> list[str]:
    rng = random.Random(seed)
    variants = []
    for _ in range(count):
        cased = "".join(ch.upper() if rng.random() < 0.5 else ch.lower() for ch in name)
        variants.append(" " * rng.randint(0, 3) + cased + " " * rng.randint(0, 3))
    return variants


def test_normalize_name() -> None:
    assert normalize_name("  Storage A ") == "storage a"


def test_seed_reads_each_kind_once(fake_store, tenant_id) -> None:
    _resolver(fake_store, tenant_id)

    assert fake_store.call_names() == ["list_categories", "list_locations"]


def test_existing_category_matches_case_insensitively(store_factory, tenant_id) -> None:
    audio = Category(id=uuid.uuid4(), name="Audio")
    store = store_factory(tenants={tenant_id}, categories=[audio])
    stats = ImportStats()

    resolution = _resolver(store, tenant_id, stats).resolve_category("  AUDIO ", row_number=1)

    assert resolution.resolved
    assert resolution.reference_id == audio.id
    assert "create_category" not in store.call_names()
    assert stats.categories_added == 0


@pytest.mark.parametrize("seed", range(5))
def test_name_is_created_once_however_it_is_cased(fake_store, tenant_id, seed) -> None:
    stats = ImportStats()
    resolver = _resolver(fake_store, tenant_id, stats)

    ids = {
        resolver.resolve_location(name, row_number=row_number).reference_id
        for row_number, name in enumerate(_variants("Storage A", seed, 8), start=1)
    }

    assert len(ids) == 1
    assert fake_store.call_names().count("create_location") == 1
    assert stats.locations_added == 1


def test_created_name_is_trimmed_but_keeps_case(fake_store, tenant_id) -> None:
    _resolver(fake_store, tenant_id).resolve_category("  Audio Gear ", row_number=1)

    assert [c.name for c in fake_store.categories] == ["Audio Gear"]


def test_categories_and_locations_use_separate_caches(fake_store, tenant_id) -> None:
    stats = ImportStats()
    resolver = _resolver(fake_store, tenant_id, stats)

    resolver.resolve_category("Stage", row_number=1)
    resolver.resolve_location("Stage", row_number=1)

    assert (stats.categories_added, stats.locations_added) == (1, 1)


def test_new_locations_are_top_level_and_not_rooms(fake_store, tenant_id) -> None:
    _resolver(fake_store, tenant_id).resolve_location("Hall", row_number=1)

    location = fake_store.locations[0]
    assert location.parent_id is None
    assert location.is_room is False


def test_top_level_entity_wins_over_nested_duplicate(store_factory, tenant_id) -> None:
    parent = Location(id=uuid.uuid4(), name="Building")
    nested = Location(id=uuid.uuid4(), name="Storage", parent_id=parent.id)
    top_level = Location(id=uuid.uuid4(), name="storage")
    store = store_factory(tenants={tenant_id}, locations=[parent, nested, top_level])

    resolution = _resolver(store, tenant_id).resolve_location("Storage", row_number=1)

    assert resolution.reference_id == top_level.id


def test_cache_keeps_first_of_several_top_level_matches() -> None:
    first = Category(id=uuid.uuid4(), name="Audio")
    second = Category(id=uuid.uuid4(), name="AUDIO")
    cache = ReferenceCache()

    cache.seed([first, second])

    assert cache.get("audio") == first.id
    assert len(cache) == 1


def test_failed_creation_is_cached_and_reported_per_row(fake_store, tenant_id) -> None:
    fake_store.reject_categories.add("Audio")
    stats = ImportStats()
    resolver = _resolver(fake_store, tenant_id, stats)

    first = resolver.resolve_category("Audio", row_number=2)
    second = resolver.resolve_category("audio", row_number=5)

    assert not first.resolved and not second.resolved
    assert (first.error.row_number, second.error.row_number) == (2, 5)
    assert first.error.kind == ErrorKind.REFERENCE_CREATION
    assert first.error.column == "category_name"
    assert fake_store.call_names().count("create_category") == 1
    assert stats.categories_added == 0


def test_dry_run_counts_planned_creations_without_writing(fake_store, tenant_id) -> None:
    stats = ImportStats()
    resolver = _resolver(fake_store, tenant_id, stats, dry_run=True)

    first = resolver.resolve_category("Audio", row_number=1)
    again = resolver.resolve_category("AUDIO", row_number=2)

    assert first.resolved and again.resolved
    assert first.reference_id is None
    assert stats.categories_added == 1
    assert "create_category" not in fake_store.call_names()


def test_store_unavailable_propagates(fake_store, tenant_id) -> None:
    fake_store.unavailable_after = 0
    resolver = _resolver(fake_store, tenant_id)

    with pytest.raises(StoreUnavailableError):
        resolver.resolve_location("Hall", row_number=1)
