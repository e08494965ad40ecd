"""Viewport and radius queries against the PostGIS parcel geometry."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from landscore.parcels.models import (
    NearbyParcel,
    ParcelFeature,
    ParcelFeatureCollection,
    ParcelListItem,
)
from landscore.query.compiler import ParamBuilder, Statement
from landscore.query.simplify import tolerance_for_zoom
from landscore.query.sql import LIST_COLUMNS, PARCEL_FROM

if TYPE_CHECKING:
    from landscore.query.bounds import BoundingBox, RadiusQuery
    from landscore.repositories.protocols import QueryStore

logger = logging.getLogger(__name__)

ADMISSION_CAP = 500


class SpatialQueryExecutor:
    """Bounding-box and radius queries.

    Results are capped at ``admission_cap`` rows. The cap bounds response
    size for broad viewports; it is not a pagination cursor.
    """

    def __init__(
        self,
        store: QueryStore,
        admission_cap: int = ADMISSION_CAP,
        srid: int = 4326,
    ) -> None:
        self._store = store
        self._cap = admission_cap
        self._srid = int(srid)

    @property
    def admission_cap(self) -> int:
        return self._cap

    def _envelope(self, b: ParamBuilder, bbox: BoundingBox) -> str:
        west = b.bind(bbox.west)
        south = b.bind(bbox.south)
        east = b.bind(bbox.east)
        north = b.bind(bbox.north)
        return f"p.geometry && ST_MakeEnvelope({west}, {south}, {east}, {north}, {self._srid})"

    def features_statement(self, bbox: BoundingBox) -> Statement:
        b = ParamBuilder()
        tolerance = b.bind(tolerance_for_zoom(bbox.zoom))
        envelope = self._envelope(b, bbox)
        cap = b.bind(self._cap)
        return b.statement(
            f"""
SELECT
    p.id,
    p.parcel_id,
    ST_AsGeoJSON(ST_SimplifyPreserveTopology(p.geometry, {tolerance})) AS geojson,
    p.address,
    p.city,
    p.area_acres,
    v.estimated_price,
    ld.zoning_code,
    ld.soil_type
{PARCEL_FROM}
WHERE {envelope}
ORDER BY p.id
LIMIT {cap}"""
        )

    def list_statement(self, bbox: BoundingBox) -> Statement:
        b = ParamBuilder()
        envelope = self._envelope(b, bbox)
        cap = b.bind(self._cap)
        return b.statement(
            f"""
SELECT{LIST_COLUMNS}
{PARCEL_FROM}
WHERE {envelope}
ORDER BY p.id
LIMIT {cap}"""
        )

    def near_statement(self, query: RadiusQuery) -> Statement:
        b = ParamBuilder()
        lng = b.bind(query.lng)
        lat = b.bind(query.lat)
        radius = b.bind(query.radius_meters)
        limit = b.bind(min(query.limit, self._cap))
        point = f"ST_SetSRID(ST_MakePoint({lng}, {lat}), {self._srid})::geography"
        return b.statement(
            f"""
SELECT{LIST_COLUMNS},
    ST_Distance(p.geometry::geography, {point}) AS distance_meters
{PARCEL_FROM}
WHERE ST_DWithin(p.geometry::geography, {point}, {radius})
ORDER BY distance_meters ASC, p.id ASC
LIMIT {limit}"""
        )

    def _note_cap(self, kind: str, count: int, bbox: BoundingBox) -> None:
        if count >= self._cap:
            logger.warning(
                "%s query hit the admission cap of %d rows; viewport %s",
                kind,
                self._cap,
                bbox.model_dump(),
            )

    async def bbox_features(self, bbox: BoundingBox) -> ParcelFeatureCollection:
        rows = await self._store.fetch_all(self.features_statement(bbox))
        self._note_cap("Feature", len(rows), bbox)
        return ParcelFeatureCollection(
            features=[ParcelFeature.from_row(r) for r in rows[: self._cap]]
        )

    async def bbox_list(self, bbox: BoundingBox) -> list[ParcelListItem]:
        rows = await self._store.fetch_all(self.list_statement(bbox))
        self._note_cap("List", len(rows), bbox)
        return [ParcelListItem.from_row(r) for r in rows[: self._cap]]

    async def near_point(self, query: RadiusQuery) -> list[NearbyParcel]:
        rows = await self._store.fetch_all(self.near_statement(query))
        logger.debug(
            "Near-point query (%.5f, %.5f, %.0fm) matched %d parcels",
            query.lat,
            query.lng,
            query.radius_meters,
            len(rows),
        )
        return [NearbyParcel.from_row(r) for r in rows[: min(query.limit, self._cap)]]
