"""Dataset-wide parcel statistics.

The aggregate and the zoning breakdown are two independent queries with no
shared snapshot. Under concurrent ingestion they may disagree slightly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from landscore.parcels.models import ParcelStats, ZoningCount
from landscore.query.compiler import Statement
from landscore.query.sql import LATEST_VALUATION_JOIN

if TYPE_CHECKING:
    from landscore.repositories.protocols import QueryStore

AGGREGATE_SQL = f"""
SELECT
    COUNT(p.id) AS total_parcels,
    COALESCE(SUM(p.area_acres), 0) AS total_area_acres,
    AVG(p.area_acres) AS avg_area_acres,
    COUNT(v.id) AS priced_parcels,
    AVG(v.estimated_price) AS avg_price,
    MIN(v.estimated_price) AS min_price,
    MAX(v.estimated_price) AS max_price
FROM parcels p
{LATEST_VALUATION_JOIN}"""

ZONING_BREAKDOWN_SQL = """
SELECT
    ld.zoning_code AS zoning_code,
    COUNT(*) AS parcel_count
FROM land_data ld
JOIN parcels p ON p.id = ld.parcel_id
WHERE ld.zoning_code IS NOT NULL
GROUP BY ld.zoning_code
ORDER BY parcel_count DESC, ld.zoning_code ASC"""


def _opt_float(value: Any) -> float | None:
    return None if value is None else float(value)


class StatisticsAggregator:
    def __init__(self, store: QueryStore) -> None:
        self._store = store

    async def stats(self) -> ParcelStats:
        agg = await self._store.fetch_one(Statement(AGGREGATE_SQL)) or {}
        breakdown = await self._store.fetch_all(Statement(ZONING_BREAKDOWN_SQL))

        return ParcelStats(
            total_parcels=int(agg.get("total_parcels") or 0),
            priced_parcels=int(agg.get("priced_parcels") or 0),
            total_area_acres=float(agg.get("total_area_acres") or 0.0),
            avg_area_acres=_opt_float(agg.get("avg_area_acres")),
            avg_price=_opt_float(agg.get("avg_price")),
            min_price=_opt_float(agg.get("min_price")),
            max_price=_opt_float(agg.get("max_price")),
            category_breakdown=[
                ZoningCount(zoning_code=r["zoning_code"], count=int(r["parcel_count"]))
                for r in breakdown
            ],
        )
