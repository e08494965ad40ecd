"""PostgreSQL parcel store and repository."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from sqlalchemy import bindparam, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from landscore.core.errors import StoreError
from landscore.db.engine import DatabaseManager
from landscore.db.models import LandDataRow, OwnerRow, ParcelRow, ValuationRow
from landscore.parcels.models import LandDataInfo, OwnerInfo, ParcelDetails, ValuationInfo

if TYPE_CHECKING:
    from landscore.query.compiler import Statement

logger = logging.getLogger(__name__)

RECENT_VALUATIONS = 5

_GEOMETRY_SQL = "SELECT ST_AsGeoJSON(geometry) AS geojson FROM parcels WHERE id = :parcel_id"


def _to_text(statement: Statement):
    clause = text(statement.sql)
    if statement.expanding:
        clause = clause.bindparams(
            *(bindparam(name, expanding=True) for name in sorted(statement.expanding))
        )
    return clause


class PostgresQueryStore:
    """Runs compiled statements on a short-lived session per call.

    Each call is independent; there is no shared snapshot between calls.
    """

    def __init__(self, db: DatabaseManager) -> None:
        self._db = db

    @property
    def is_spatial(self) -> bool:
        return self._db.is_spatial

    async def fetch_all(self, statement: Statement) -> list[Mapping[str, Any]]:
        try:
            async with self._db.session() as db:
                result = await db.execute(_to_text(statement), dict(statement.params))
                return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as exc:
            logger.error("Parcel store query failed: %s", exc.__class__.__name__)
            raise StoreError("Parcel store query failed") from exc

    async def fetch_one(self, statement: Statement) -> Mapping[str, Any] | None:
        try:
            async with self._db.session() as db:
                result = await db.execute(_to_text(statement), dict(statement.params))
                row = result.mappings().first()
                return dict(row) if row is not None else None
        except SQLAlchemyError as exc:
            logger.error("Parcel store query failed: %s", exc.__class__.__name__)
            raise StoreError("Parcel store query failed") from exc


class PostgresParcelRepository:
    """ORM-backed single-parcel lookups."""

    def __init__(self, db: DatabaseManager) -> None:
        self._db = db

    async def get_parcel(self, parcel_id: str) -> ParcelDetails | None:
        try:
            async with self._db.session() as db:
                result = await db.execute(
                    select(ParcelRow)
                    .where(ParcelRow.id == parcel_id)
                    .options(
                        selectinload(ParcelRow.owner),
                        selectinload(ParcelRow.land_data),
                        selectinload(ParcelRow.valuations),
                    )
                )
                row = result.scalar_one_or_none()
                if row is None:
                    return None

                geometry = None
                if self._db.is_spatial:
                    geo = await db.execute(text(_GEOMETRY_SQL), {"parcel_id": parcel_id})
                    geojson = geo.scalar_one_or_none()
                    geometry = json.loads(geojson) if geojson else None
                elif row.geometry_json:
                    geometry = json.loads(row.geometry_json)

                return self._row_to_details(row, geometry)
        except SQLAlchemyError as exc:
            logger.error("Parcel lookup failed: %s", exc.__class__.__name__)
            raise StoreError("Parcel lookup failed") from exc

    @staticmethod
    def _row_to_details(row: ParcelRow, geometry: dict[str, Any] | None) -> ParcelDetails:
        valuations = sorted(
            row.valuations, key=lambda v: (v.valuation_date, v.id), reverse=True
        )[:RECENT_VALUATIONS]
        return ParcelDetails(
            id=row.id,
            parcel_id=row.parcel_id,
            apn=row.apn,
            address=row.address,
            city=row.city,
            state=row.state,
            zip_code=row.zip_code,
            country=row.country,
            area_sqft=row.area_sqft,
            area_acres=row.area_acres,
            area_sqm=row.area_sqm,
            centroid_lat=row.centroid_lat,
            centroid_lng=row.centroid_lng,
            geometry=geometry,
            owner=_owner_info(row.owner) if row.owner else None,
            land_data=_land_data_info(row.land_data) if row.land_data else None,
            valuations=[_valuation_info(v) for v in valuations],
            created_at=row.created_at,
            updated_at=row.updated_at,
        )


def _owner_info(row: OwnerRow) -> OwnerInfo:
    return OwnerInfo(
        id=row.id,
        name=row.name,
        owner_type=row.owner_type,
        mailing_address=row.mailing_address,
        phone=row.phone,
        email=row.email,
    )


def _land_data_info(row: LandDataRow) -> LandDataInfo:
    return LandDataInfo(
        soil_type=row.soil_type,
        soil_quality=row.soil_quality,
        cropland_class=row.cropland_class,
        irrigation_type=row.irrigation_type,
        zoning_code=row.zoning_code,
        zoning_description=row.zoning_description,
        land_use_code=row.land_use_code,
        elevation=row.elevation,
        slope=row.slope,
        flood_zone=row.flood_zone,
        has_water_access=row.has_water_access,
        has_road_access=row.has_road_access,
        has_utilities=row.has_utilities,
        distance_to_water=row.distance_to_water,
        distance_to_road=row.distance_to_road,
    )


def _valuation_info(row: ValuationRow) -> ValuationInfo:
    return ValuationInfo(
        id=row.id,
        estimated_price=row.estimated_price,
        tax_assessed_value=row.tax_assessed_value,
        market_value=row.market_value,
        price_per_sqft=row.price_per_sqft,
        price_per_acre=row.price_per_acre,
        last_sale_date=row.last_sale_date,
        last_sale_price=row.last_sale_price,
        valuation_date=row.valuation_date,
        valuation_source=row.valuation_source,
        confidence=row.confidence,
    )
