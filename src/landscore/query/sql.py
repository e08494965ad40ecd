"""Shared SQL fragments for parcel queries.

The latest valuation is joined with a correlated subquery rather than a
LATERAL join so the attribute queries also run on SQLite.
"""

from __future__ import annotations

LATEST_VALUATION_JOIN = """
LEFT JOIN valuations v ON v.id = (
    SELECT lv.id
    FROM valuations lv
    WHERE lv.parcel_id = p.id
    ORDER BY lv.valuation_date DESC, lv.id DESC
    LIMIT 1
)"""

LAND_DATA_JOIN = "LEFT JOIN land_data ld ON ld.parcel_id = p.id"

PARCEL_FROM = f"""
FROM parcels p
{LAND_DATA_JOIN}
{LATEST_VALUATION_JOIN}"""

LIST_COLUMNS = """
    p.id,
    p.parcel_id,
    p.address,
    p.city,
    p.area_sqft,
    p.area_acres,
    p.centroid_lat,
    p.centroid_lng,
    v.estimated_price,
    ld.zoning_code"""

SEARCH_ORDER = "ORDER BY v.estimated_price DESC NULLS LAST, p.id ASC"
