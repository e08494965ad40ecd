"""Parcel result shapes returned by the query engine."""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _float_or_none(value: Any) -> float | None:
    return None if value is None else float(value)


class ResultModel(BaseModel):
    """Result shape serialized with camelCase keys.

    Dump with ``by_alias=True`` for HTTP and tool responses.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ParcelListItem(ResultModel):
    """Attribute-only parcel row (no geometry)."""

    id: str
    parcel_id: str
    address: str | None = None
    city: str | None = None
    area_sqft: float
    area_acres: float
    centroid_lat: float | None = None
    centroid_lng: float | None = None
    estimated_price: float | None = None
    zoning_code: str | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> ParcelListItem:
        return cls(
            id=row["id"],
            parcel_id=row["parcel_id"],
            address=row["address"],
            city=row["city"],
            area_sqft=float(row["area_sqft"]),
            area_acres=float(row["area_acres"]),
            centroid_lat=_float_or_none(row["centroid_lat"]),
            centroid_lng=_float_or_none(row["centroid_lng"]),
            estimated_price=_float_or_none(row["estimated_price"]),
            zoning_code=row["zoning_code"],
        )


class NearbyParcel(ParcelListItem):
    """Parcel row with its distance from a query point."""

    distance_meters: float

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> NearbyParcel:
        item = ParcelListItem.from_row(row)
        return cls(**item.model_dump(), distance_meters=float(row["distance_meters"]))


class ParcelFeature(ResultModel):
    """GeoJSON feature for one parcel."""

    type: Literal["Feature"] = "Feature"
    id: str
    geometry: dict[str, Any] | None = None
    properties: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> ParcelFeature:
        geojson = row["geojson"]
        return cls(
            id=row["id"],
            geometry=json.loads(geojson) if geojson else None,
            properties={
                "id": row["id"],
                "parcelId": row["parcel_id"],
                "address": row["address"],
                "city": row["city"],
                "areaAcres": float(row["area_acres"]),
                "estimatedPrice": _float_or_none(row["estimated_price"]),
                "zoningCode": row["zoning_code"],
                "soilType": row["soil_type"],
            },
        )


class ParcelFeatureCollection(ResultModel):
    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: list[ParcelFeature] = Field(default_factory=list)


class SearchPage(ResultModel):
    """One page of filtered search results."""

    rows: list[ParcelListItem]
    total: int
    limit: int
    offset: int
    has_more: bool


class ZoningCount(ResultModel):
    zoning_code: str
    count: int


class ParcelStats(ResultModel):
    """Dataset-wide statistics.

    Averages and extrema are ``None`` when no parcel contributes to them;
    counts and sums are zero.
    """

    total_parcels: int = 0
    priced_parcels: int = 0
    total_area_acres: float = 0.0
    avg_area_acres: float | None = None
    avg_price: float | None = None
    min_price: float | None = None
    max_price: float | None = None
    category_breakdown: list[ZoningCount] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Parcel details
# ---------------------------------------------------------------------------


class OwnerInfo(ResultModel):
    id: str
    name: str
    owner_type: str
    mailing_address: str | None = None
    phone: str | None = None
    email: str | None = None


class LandDataInfo(ResultModel):
    soil_type: str | None = None
    soil_quality: int | None = None
    cropland_class: str | None = None
    irrigation_type: str | None = None
    zoning_code: str | None = None
    zoning_description: str | None = None
    land_use_code: str | None = None
    elevation: float | None = None
    slope: float | None = None
    flood_zone: str | None = None
    has_water_access: bool = False
    has_road_access: bool = False
    has_utilities: bool = False
    distance_to_water: float | None = None
    distance_to_road: float | None = None


class ValuationInfo(ResultModel):
    id: str
    estimated_price: float
    tax_assessed_value: float | None = None
    market_value: float | None = None
    price_per_sqft: float | None = None
    price_per_acre: float | None = None
    last_sale_date: datetime | None = None
    last_sale_price: float | None = None
    valuation_date: datetime
    valuation_source: str | None = None
    confidence: float | None = None


class ParcelDetails(ResultModel):
    """Full record for a single parcel."""

    id: str
    parcel_id: str
    apn: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str
    area_sqft: float
    area_acres: float
    area_sqm: float
    centroid_lat: float | None = None
    centroid_lng: float | None = None
    geometry: dict[str, Any] | None = None
    owner: OwnerInfo | None = None
    land_data: LandDataInfo | None = None
    valuations: list[ValuationInfo] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
