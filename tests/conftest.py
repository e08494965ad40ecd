"""Shared test fixtures and helpers.

``seeded_db`` holds twenty parcels on in-memory SQLite:

* parcel-01..07  AGRICULTURAL, 11..17 acres, Austin, price 100k * n
  (parcel-01 also has an older 999,999 valuation)
* parcel-08..09  AGRICULTURAL, 5 acres, Round Rock, 50k
* parcel-10..13  RESIDENTIAL, 2 acres, Cedar Park, 310k..313k
  (parcel-13 has no road access)
* parcel-14..15  COMMERCIAL, 12 acres, Austin, 900k each
* parcel-16      INDUSTRIAL, 30 acres, no valuation
* parcel-17      no land data, 75k
* parcel-18      MIXED_USE, city "Lake_way", no valuation
* parcel-19      MIXED_USE, city "Lakesway", 250k
* parcel-20      no land data, no valuation, no city
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from landscore.db.base import Base
from landscore.db.engine import DatabaseManager
from landscore.db.models import LandDataRow, OwnerRow, ParcelRow, ValuationRow
from landscore.parcels.area import areas_from_sqft, sqft_from_acres
from landscore.query.compiler import Statement

VALUATION_DATE = datetime(2026, 1, 1, tzinfo=timezone.utc)

SQUARE = {
    "type": "MultiPolygon",
    "coordinates": [[[[-97.75, 30.26], [-97.74, 30.26], [-97.74, 30.27], [-97.75, 30.26]]]],
}

# (n, acres, city, zoning, soil, price, water, road)
SEED_PARCELS: list[tuple[Any, ...]] = (
    [(n, 10.0 + n, "Austin", "AGRICULTURAL", "LOAM", 100_000.0 * n, n % 2 == 1, True) for n in range(1, 8)]
    + [(n, 5.0, "Round Rock", "AGRICULTURAL", "CLAY", 50_000.0, False, True) for n in (8, 9)]
    + [
        (n, 2.0, "Cedar Park", "RESIDENTIAL", "SANDY_LOAM", 300_000.0 + n * 1000, False, n != 13)
        for n in range(10, 14)
    ]
    + [(n, 12.0, "Austin", "COMMERCIAL", "BLACK_SOIL", 900_000.0, False, True) for n in (14, 15)]
    + [
        (16, 30.0, "Manor", "INDUSTRIAL", "RED_SOIL", None, False, True),
        (17, 1.0, "Kyle", None, None, 75_000.0, False, True),
        (18, 3.0, "Lake_way", "MIXED_USE", "ALLUVIAL", None, True, True),
        (19, 3.0, "Lakesway", "MIXED_USE", "ALLUVIAL", 250_000.0, False, True),
        (20, 0.5, None, None, None, None, False, True),
    ]
)

TOTAL_AREA_ACRES = sum(p[1] for p in SEED_PARCELS)


def pid(n: int) -> str:
    return f"parcel-{n:02d}"


def seed_rows() -> list[Any]:
    owner = OwnerRow(
        id="owner-1",
        name="Maria Garcia",
        owner_type="INDIVIDUAL",
        created_at=VALUATION_DATE,
        updated_at=VALUATION_DATE,
    )
    rows: list[Any] = [owner]
    for n, acres, city, zoning, soil, price, water, road in SEED_PARCELS:
        sqft = sqft_from_acres(acres)
        _, sqm = areas_from_sqft(sqft)
        parcel = ParcelRow(
            id=pid(n),
            parcel_id=f"TRAVIS-1-{n:03d}-01A",
            address=f"{n} Ranch Rd",
            city=city,
            state="TX",
            area_sqft=sqft,
            area_acres=acres,
            area_sqm=sqm,
            centroid_lat=30.2 + n / 1000,
            centroid_lng=-97.7 - n / 1000,
            owner_id="owner-1" if n == 1 else None,
            geometry_json=json.dumps(SQUARE) if n == 1 else None,
            created_at=VALUATION_DATE,
            updated_at=VALUATION_DATE,
        )
        rows.append(parcel)
        if zoning is not None:
            rows.append(
                LandDataRow(
                    id=f"land-{n:02d}",
                    parcel_id=pid(n),
                    zoning_code=zoning,
                    soil_type=soil,
                    cropland_class="PRIME" if zoning == "AGRICULTURAL" else "NOT_PRIME",
                    has_water_access=water,
                    has_road_access=road,
                )
            )
        if price is not None:
            rows.append(
                ValuationRow(
                    id=f"val-{n:02d}",
                    parcel_id=pid(n),
                    estimated_price=price,
                    valuation_date=VALUATION_DATE,
                )
            )
    rows.append(
        ValuationRow(
            id="val-01-old",
            parcel_id=pid(1),
            estimated_price=999_999.0,
            valuation_date=VALUATION_DATE - timedelta(days=730),
        )
    )
    return rows


@pytest.fixture
async def empty_db():
    """A DatabaseManager with the parcel tables created and no rows."""
    manager = DatabaseManager("sqlite+aiosqlite:///:memory:")
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield manager
    await manager.close()


@pytest.fixture
async def seeded_db(empty_db):
    async with empty_db.session() as session:
        session.add_all(seed_rows())
        await session.commit()
    return empty_db


class RecordingStore:
    """In-memory QueryStore that records statements and returns canned rows."""

    is_spatial = True

    def __init__(self, rows: list[Mapping[str, Any]] | None = None) -> None:
        self.rows = list(rows or [])
        self.statements: list[Statement] = []

    async def fetch_all(self, statement: Statement) -> list[Mapping[str, Any]]:
        self.statements.append(statement)
        return list(self.rows)

    async def fetch_one(self, statement: Statement) -> Mapping[str, Any] | None:
        self.statements.append(statement)
        return self.rows[0] if self.rows else None


def list_row(n: int, price: float | None = 100_000.0, **extra: Any) -> dict[str, Any]:
    """A store row shaped like the list/search SELECT."""
    row = {
        "id": pid(n),
        "parcel_id": f"TRAVIS-1-{n:03d}-01A",
        "address": f"{n} Ranch Rd",
        "city": "Austin",
        "area_sqft": 43560.0,
        "area_acres": 1.0,
        "centroid_lat": 30.27,
        "centroid_lng": -97.74,
        "estimated_price": price,
        "zoning_code": "AGRICULTURAL",
    }
    row.update(extra)
    return row


def feature_row(n: int) -> dict[str, Any]:
    return {
        "id": pid(n),
        "parcel_id": f"TRAVIS-1-{n:03d}-01A",
        "geojson": json.dumps(SQUARE),
        "address": f"{n} Ranch Rd",
        "city": "Austin",
        "area_acres": 1.0,
        "estimated_price": 100_000.0,
        "zoning_code": "AGRICULTURAL",
        "soil_type": "LOAM",
    }
