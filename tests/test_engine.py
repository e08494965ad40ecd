"""Tests for ParcelQueryEngine parcel lookups."""

from __future__ import annotations

import pytest

from conftest import RecordingStore, pid
from landscore.core.errors import NotFound, ParcelNotFound, ValidationError
from landscore.query.engine import ParcelQueryEngine
from landscore.repositories.postgres.parcels import (
    PostgresParcelRepository,
    PostgresQueryStore,
)
from landscore.repositories.protocols import ParcelRepository, QueryStore


@pytest.fixture
def engine(seeded_db):
    return ParcelQueryEngine(
        PostgresQueryStore(seeded_db), PostgresParcelRepository(seeded_db)
    )


async def test_get_parcel_details(engine):
    details = await engine.get_parcel(pid(1))
    assert details.id == pid(1)
    assert details.parcel_id == "TRAVIS-1-001-01A"
    assert details.country == "USA"
    assert details.area_acres == 11.0
    assert details.owner is not None
    assert details.owner.name == "Maria Garcia"
    assert details.land_data is not None
    assert details.land_data.zoning_code == "AGRICULTURAL"
    assert details.land_data.has_water_access is True
    assert details.geometry["type"] == "MultiPolygon"


async def test_valuations_newest_first(engine):
    details = await engine.get_parcel(pid(1))
    assert [v.id for v in details.valuations] == ["val-01", "val-01-old"]
    assert details.valuations[0].estimated_price == 100_000


async def test_parcel_without_related_rows(engine):
    details = await engine.get_parcel(pid(20))
    assert details.owner is None
    assert details.land_data is None
    assert details.valuations == []
    assert details.geometry is None
    assert details.city is None


async def test_unknown_parcel(engine):
    with pytest.raises(ParcelNotFound) as exc_info:
        await engine.get_parcel("parcel-99")
    assert exc_info.value.parcel_id == "parcel-99"
    assert isinstance(exc_info.value, NotFound)


async def test_blank_id_is_a_validation_error():
    store = RecordingStore()
    engine = ParcelQueryEngine(store)
    with pytest.raises(ValidationError):
        await engine.get_parcel("  ")
    assert store.statements == []


async def test_without_repository_every_lookup_is_not_found():
    engine = ParcelQueryEngine(RecordingStore())
    with pytest.raises(ParcelNotFound):
        await engine.get_parcel(pid(1))


async def test_postgres_classes_satisfy_protocols(empty_db):
    assert isinstance(PostgresQueryStore(empty_db), QueryStore)
    assert isinstance(PostgresParcelRepository(empty_db), ParcelRepository)
    assert isinstance(RecordingStore(), QueryStore)


def test_engine_exposes_config():
    engine = ParcelQueryEngine(RecordingStore())
    assert engine.config.admission_cap == 500
    assert engine.config.default_search_limit == 100
