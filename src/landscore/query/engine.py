"""Public entry point of the parcel query engine.

Every operation validates its raw input first, so a ``ValidationError``
never costs a store round-trip. The engine is stateless and role-agnostic;
it is safe to share one instance across concurrent requests.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from landscore.core.config import QueryConfig
from landscore.core.errors import ParcelNotFound, ValidationError
from landscore.parcels.models import (
    NearbyParcel,
    ParcelDetails,
    ParcelFeatureCollection,
    ParcelListItem,
    ParcelStats,
    SearchPage,
)
from landscore.query.bounds import BoundingBox, RadiusQuery
from landscore.query.filters import ParcelFilter
from landscore.query.search import FilteredSearchExecutor
from landscore.query.spatial import SpatialQueryExecutor
from landscore.query.stats import StatisticsAggregator
from landscore.repositories.protocols import ParcelRepository, QueryStore

logger = logging.getLogger(__name__)


class ParcelQueryEngine:
    """Facade over the spatial, search and statistics executors.

    Args:
        store: Executes compiled statements.
        repository: Optional single-parcel lookup; without it ``get_parcel``
            raises ``ParcelNotFound`` for every id.
        config: Limits and defaults. Defaults to ``QueryConfig()``.
    """

    def __init__(
        self,
        store: QueryStore,
        repository: ParcelRepository | None = None,
        config: QueryConfig | None = None,
    ) -> None:
        self._config = config or QueryConfig()
        self._repository = repository
        self._spatial = SpatialQueryExecutor(
            store, admission_cap=self._config.admission_cap, srid=self._config.srid
        )
        self._search = FilteredSearchExecutor(store)
        self._stats = StatisticsAggregator(store)

    @property
    def config(self) -> QueryConfig:
        return self._config

    async def bbox_features(
        self,
        north: Any,
        south: Any,
        east: Any,
        west: Any,
        zoom: Any = None,
    ) -> ParcelFeatureCollection:
        bbox = BoundingBox.from_edges(north, south, east, west, zoom)
        return await self._spatial.bbox_features(bbox)

    async def bbox_list(
        self,
        north: Any,
        south: Any,
        east: Any,
        west: Any,
    ) -> list[ParcelListItem]:
        bbox = BoundingBox.from_edges(north, south, east, west)
        return await self._spatial.bbox_list(bbox)

    async def near_point(
        self,
        lat: Any,
        lng: Any,
        radius_meters: Any = None,
        limit: Any = None,
    ) -> list[NearbyParcel]:
        query = RadiusQuery.from_params(
            lat,
            lng,
            self._config.default_radius_meters if radius_meters is None else radius_meters,
            self._config.default_nearby_limit if limit is None else limit,
        )
        return await self._spatial.near_point(query)

    async def search(
        self, flt: ParcelFilter | Mapping[str, Any] | None = None, **params: Any
    ) -> SearchPage:
        if not isinstance(flt, ParcelFilter):
            data = dict(flt or {})
            data.setdefault("limit", self._config.default_search_limit)
            flt = ParcelFilter.parse(data, **params)
        elif params:
            raise ValidationError("pass either a ParcelFilter or keyword filters, not both")
        if flt.limit > self._config.max_search_limit:
            raise ValidationError(
                f"limit must not exceed {self._config.max_search_limit}, got {flt.limit}"
            )
        return await self._search.search(flt)

    async def stats(self) -> ParcelStats:
        return await self._stats.stats()

    async def get_parcel(self, parcel_id: str) -> ParcelDetails:
        parcel_id = (parcel_id or "").strip()
        if not parcel_id:
            raise ValidationError("parcel id is required")
        details = None
        if self._repository is not None:
            details = await self._repository.get_parcel(parcel_id)
        if details is None:
            raise ParcelNotFound(parcel_id)
        return details
