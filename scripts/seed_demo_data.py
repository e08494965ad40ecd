#!/usr/bin/env python3
"""Seed demo parcels around Austin, Texas into a LandScore database.

Usage:
    # Create the schema first:
    alembic upgrade head

    # Seed 75 parcels:
    python3 scripts/seed_demo_data.py --database-url postgresql+asyncpg://...

    # Or read the URL from LANDSCORE_DB_DATABASE_URL:
    python3 scripts/seed_demo_data.py --count 50 --reset

Each parcel gets an owner, land data and one to three valuations. On
PostgreSQL the polygon is also written to the PostGIS ``geometry`` column so
the centroid trigger fills ``centroid_lat``/``centroid_lng``.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import math
import os
import random
import sys
import uuid
from datetime import datetime, timedelta, timezone

from sqlalchemy import delete, text

from landscore.core.types import CroplandClass, SoilType, ZoningCode
from landscore.db.base import Base
from landscore.db.engine import DatabaseManager
from landscore.db.models import LandDataRow, OwnerRow, ParcelRow, ValuationRow
from landscore.db.postgis import install_postgis
from landscore.parcels.area import areas_from_sqft, sqft_from_acres

CENTER_LAT = 30.2672
CENTER_LNG = -97.7431
SPREAD_DEG = 0.12
MIN_ACRES = 0.5
MAX_ACRES = 25.0

IRRIGATION_TYPES = ["DRIP", "FLOOD", "SPRINKLER", "CANAL", "WELL", "NONE"]
OWNER_TYPES = ["INDIVIDUAL", "FAMILY", "CORPORATION", "GOVERNMENT", "TRUST", "COOPERATIVE"]
FIRST_NAMES = ["James", "Mary", "Carlos", "Maria", "Sarah", "David", "Ana", "Robert"]
LAST_NAMES = ["Smith", "Garcia", "Johnson", "Martinez", "Brown", "Lopez", "Wilson", "Clark"]
AUSTIN_AREAS = [
    "Austin", "Round Rock", "Cedar Park", "Pflugerville", "Georgetown",
    "Lakeway", "Bee Cave", "Dripping Springs", "Manor", "Leander", "Kyle",
]
STREETS = ["Oak", "Cedar", "Ranch", "Mesa", "River", "Hill Country", "Pecan"]

ZONING_MULTIPLIER = {
    ZoningCode.COMMERCIAL: 2.5,
    ZoningCode.INDUSTRIAL: 2.0,
    ZoningCode.RESIDENTIAL: 1.8,
    ZoningCode.MIXED_USE: 1.5,
    ZoningCode.AGRICULTURAL: 1.0,
}
CROPLAND_MULTIPLIER = {
    CroplandClass.PRIME: 1.4,
    CroplandClass.UNIQUE: 1.3,
    CroplandClass.STATEWIDE: 1.1,
    CroplandClass.LOCAL: 1.0,
    CroplandClass.NOT_PRIME: 0.7,
}


# ---------------------------------------------------------------------------
# Generators
# ---------------------------------------------------------------------------


def parcel_polygon(rng: random.Random, lat: float, lng: float, acres: float) -> dict:
    """Irregular GeoJSON MultiPolygon of roughly ``acres`` around a centre."""
    side_m = math.sqrt(acres * 4046.86)
    half_lat = (side_m / 2) / 111_000
    half_lng = (side_m / 2) / (111_000 * math.cos(math.radians(lat)))
    n = rng.randint(4, 7)
    ring = []
    for i in range(n):
        angle = i * 2 * math.pi / n + rng.uniform(-0.2, 0.2)
        factor = 1 + rng.uniform(-0.3, 0.3)
        ring.append([lng + math.cos(angle) * half_lng * factor, lat + math.sin(angle) * half_lat * factor])
    ring.append(list(ring[0]))
    return {"type": "MultiPolygon", "coordinates": [[ring]]}


def price_per_acre(
    rng: random.Random,
    zoning: ZoningCode,
    cropland: CroplandClass,
    soil_quality: int,
    water: bool,
    road: bool,
    acres: float,
) -> float:
    price = 25_000.0
    price *= ZONING_MULTIPLIER[zoning]
    price *= CROPLAND_MULTIPLIER[cropland]
    price *= 0.5 + (soil_quality / 10) * 0.8
    if water:
        price *= 1.25
    if road:
        price *= 1.15
    if acres > 10:
        price *= 0.9
    if acres > 20:
        price *= 0.85
    return price * rng.uniform(0.85, 1.15)


def build_parcel(rng: random.Random, index: int) -> tuple[OwnerRow, ParcelRow, dict]:
    now = datetime.now(timezone.utc)
    lat = CENTER_LAT + rng.uniform(-SPREAD_DEG / 2, SPREAD_DEG / 2)
    lng = CENTER_LNG + rng.uniform(-SPREAD_DEG / 2, SPREAD_DEG / 2)
    acres = round(rng.uniform(MIN_ACRES, MAX_ACRES), 2)
    sqft = sqft_from_acres(acres)
    _, sqm = areas_from_sqft(sqft)
    geometry = parcel_polygon(rng, lat, lng, acres)

    owner = OwnerRow(
        id=str(uuid.uuid4()),
        name=f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}",
        owner_type=rng.choice(OWNER_TYPES),
        mailing_address=f"PO Box {rng.randint(100, 9999)}, Austin, TX",
        created_at=now,
        updated_at=now,
    )

    zoning = rng.choices(list(ZoningCode), weights=[40, 25, 15, 10, 10])[0]
    cropland = rng.choice(list(CroplandClass))
    soil_quality = rng.randint(3, 10)
    water = rng.random() < 0.3
    road = rng.random() < 0.85

    parcel = ParcelRow(
        id=str(uuid.uuid4()),
        parcel_id=f"TRAVIS-{rng.randint(1, 4)}-{index:03d}-{rng.randint(1, 99):02d}{chr(65 + index % 6)}",
        apn=f"{rng.randint(100000, 999999)}",
        address=f"{rng.randint(100, 9999)} {rng.choice(STREETS)} Rd",
        city=rng.choice(AUSTIN_AREAS),
        state="TX",
        zip_code=f"787{rng.randint(0, 99):02d}",
        area_sqft=sqft,
        area_acres=acres,
        area_sqm=sqm,
        geometry_json=json.dumps(geometry),
        centroid_lat=lat,
        centroid_lng=lng,
        owner_id=owner.id,
        created_at=now,
        updated_at=now,
    )
    parcel.land_data = LandDataRow(
        id=str(uuid.uuid4()),
        soil_type=rng.choice(list(SoilType)),
        soil_quality=soil_quality,
        cropland_class=cropland,
        irrigation_type=rng.choice(IRRIGATION_TYPES),
        zoning_code=zoning,
        elevation=round(rng.uniform(130, 330), 1),
        slope=round(rng.uniform(0, 12), 1),
        flood_zone=rng.choice(["X", "AE", "A", None]),
        has_water_access=water,
        has_road_access=road,
        has_utilities=rng.random() < 0.6,
    )

    per_acre = price_per_acre(rng, zoning, cropland, soil_quality, water, road, acres)
    for years_ago in range(rng.randint(1, 3)):
        factor = 0.95 ** years_ago
        total = round(per_acre * acres * factor, 2)
        parcel.valuations.append(
            ValuationRow(
                id=str(uuid.uuid4()),
                estimated_price=total,
                tax_assessed_value=round(total * 0.85, 2),
                market_value=total,
                price_per_acre=round(per_acre * factor, 2),
                price_per_sqft=round(total / sqft, 4),
                valuation_date=now - timedelta(days=365 * years_ago),
                valuation_source="DEMO_MODEL",
                confidence=round(rng.uniform(0.7, 0.95), 2),
            )
        )
    return owner, parcel, geometry


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


async def seed(database_url: str, count: int, reset: bool, seed_value: int) -> None:
    rng = random.Random(seed_value)
    db = DatabaseManager(database_url)
    try:
        async with db.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            await install_postgis(conn)

        async with db.session() as session:
            if reset:
                for model in (ValuationRow, LandDataRow, ParcelRow, OwnerRow):
                    await session.execute(delete(model))

            geometries = []
            for i in range(count):
                owner, parcel, geometry = build_parcel(rng, i)
                session.add_all([owner, parcel])
                geometries.append((parcel.id, geometry))
            await session.flush()

            if db.is_spatial:
                for parcel_id, geometry in geometries:
                    await session.execute(
                        text(
                            "UPDATE parcels SET geometry = "
                            "ST_SetSRID(ST_GeomFromGeoJSON(:geojson), 4326) WHERE id = :id"
                        ),
                        {"geojson": json.dumps(geometry), "id": parcel_id},
                    )
            await session.commit()
        print(f"Seeded {count} parcels into {db.dialect_name}")
    finally:
        await db.close()


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed LandScore demo parcels")
    parser.add_argument(
        "--database-url",
        default=os.environ.get("LANDSCORE_DB_DATABASE_URL"),
        help="SQLAlchemy async URL (default: $LANDSCORE_DB_DATABASE_URL)",
    )
    parser.add_argument("--count", type=int, default=75, help="Number of parcels")
    parser.add_argument("--reset", action="store_true", help="Delete existing parcels first")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    args = parser.parse_args()

    if not args.database_url:
        print("No database URL given (use --database-url or LANDSCORE_DB_DATABASE_URL)")
        sys.exit(1)

    asyncio.run(seed(args.database_url, args.count, args.reset, args.seed))


if __name__ == "__main__":
    main()
