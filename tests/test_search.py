"""Tests for filtered, paginated search on seeded SQLite data."""

from __future__ import annotations

import pytest

from conftest import pid
from landscore.core.config import QueryConfig
from landscore.core.errors import ValidationError
from landscore.query.engine import ParcelQueryEngine
from landscore.query.filters import ParcelFilter
from landscore.repositories.postgres.parcels import PostgresQueryStore


@pytest.fixture
def engine(seeded_db):
    return ParcelQueryEngine(PostgresQueryStore(seeded_db))


async def test_large_agricultural_first_page(engine):
    page = await engine.search(
        {"minAreaAcres": 10, "zoningCodes": ["AGRICULTURAL"], "limit": 5}
    )
    assert page.total == 7
    assert len(page.rows) == 5
    assert page.has_more is True
    assert [r.id for r in page.rows] == [pid(7), pid(6), pid(5), pid(4), pid(3)]
    assert all(r.area_acres >= 10 for r in page.rows)
    assert all(r.zoning_code == "AGRICULTURAL" for r in page.rows)


async def test_large_agricultural_last_page(engine):
    page = await engine.search(
        {"minAreaAcres": 10, "zoningCodes": ["AGRICULTURAL"], "limit": 5, "offset": 5}
    )
    assert page.total == 7
    assert [r.id for r in page.rows] == [pid(2), pid(1)]
    assert page.has_more is False


async def test_offset_past_end(engine):
    page = await engine.search({"zoningCodes": "AGRICULTURAL", "offset": 50})
    assert page.total == 9
    assert page.rows == []
    assert page.has_more is False


async def test_no_filter_returns_everything_ordered(engine):
    page = await engine.search()
    assert page.total == 20
    assert len(page.rows) == 20
    ids = [r.id for r in page.rows]
    # Price ties fall back to id; unpriced parcels come last.
    assert ids[:2] == [pid(14), pid(15)]
    assert ids[-3:] == [pid(16), pid(18), pid(20)]
    prices = [r.estimated_price for r in page.rows if r.estimated_price is not None]
    assert prices == sorted(prices, reverse=True)


async def test_order_is_stable_across_pages(engine):
    full = await engine.search(limit=20)
    pages = []
    for offset in range(0, 20, 6):
        page = await engine.search(limit=6, offset=offset)
        pages.extend(r.id for r in page.rows)
    assert pages == [r.id for r in full.rows]


async def test_latest_valuation_only(engine):
    page = await engine.search({"minPrice": 950_000})
    assert page.total == 0

    page = await engine.search({"maxPrice": 100_000, "zoningCodes": ["AGRICULTURAL"]})
    assert {r.id for r in page.rows} == {pid(1), pid(8), pid(9)}
    parcel_1 = next(r for r in page.rows if r.id == pid(1))
    assert parcel_1.estimated_price == 100_000


async def test_price_range(engine):
    page = await engine.search({"minPrice": 300_000, "maxPrice": 600_000})
    assert {r.id for r in page.rows} == {
        pid(3), pid(4), pid(5), pid(6), pid(10), pid(11), pid(12), pid(13)
    }


async def test_city_is_case_insensitive_substring(engine):
    page = await engine.search({"city": "AUST"})
    assert page.total == 9
    assert all(r.city == "Austin" for r in page.rows)


async def test_city_wildcards_are_literal(engine):
    page = await engine.search({"city": "e_w"})
    assert [r.id for r in page.rows] == [pid(18)]


async def test_access_flags(engine):
    water = await engine.search({"hasWaterAccess": True})
    assert {r.id for r in water.rows} == {pid(1), pid(3), pid(5), pid(7), pid(18)}

    no_road = await engine.search({"hasRoadAccess": False})
    assert [r.id for r in no_road.rows] == [pid(13)]


async def test_multiple_soil_types(engine):
    page = await engine.search({"soilTypes": "CLAY,ALLUVIAL"})
    assert {r.id for r in page.rows} == {pid(8), pid(9), pid(18), pid(19)}


async def test_empty_zoning_set_is_no_constraint(engine):
    page = await engine.search({"zoningCodes": []})
    assert page.total == 20


async def test_total_is_never_below_page_size(engine):
    for data in ({}, {"city": "austin"}, {"minAreaAcres": 3}, {"hasWaterAccess": False}):
        page = await engine.search({**data, "limit": 4})
        assert page.total >= len(page.rows)
        assert page.has_more == (page.offset + len(page.rows) < page.total)


async def test_accepts_a_parsed_filter(engine):
    page = await engine.search(ParcelFilter(city="Kyle"))
    assert [r.id for r in page.rows] == [pid(17)]
    assert page.rows[0].zoning_code is None


async def test_filter_and_keywords_together_rejected(engine):
    with pytest.raises(ValidationError):
        await engine.search(ParcelFilter(), limit=5)


async def test_limit_above_configured_maximum(seeded_db):
    engine = ParcelQueryEngine(
        PostgresQueryStore(seeded_db),
        config=QueryConfig(default_search_limit=10, max_search_limit=50),
    )
    with pytest.raises(ValidationError):
        await engine.search(limit=100)
    page = await engine.search()
    assert page.limit == 10
    assert len(page.rows) == 10
