"""FastAPI router for parcel map, search and statistics endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, HTTPException, Request

from landscore.core.errors import NotFound, StoreError, ValidationError
from landscore.query.engine import ParcelQueryEngine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/parcels", tags=["parcels"])

STORE_UNAVAILABLE = "Parcel store unavailable"


def get_engine(request: Request) -> ParcelQueryEngine:
    engine = getattr(request.app.state, "query_engine", None)
    if engine is None:
        raise HTTPException(status_code=503, detail="Parcel query engine not available")
    return engine


def translate_error(exc: Exception) -> HTTPException:
    """Map an engine error to an HTTP error without leaking store detail."""
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, NotFound):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, StoreError):
        return HTTPException(status_code=503, detail=STORE_UNAVAILABLE)
    logger.exception("Unexpected parcel query failure")
    return HTTPException(status_code=500, detail="Internal error")


@router.get("/bbox")
async def parcels_in_bbox(
    request: Request,
    north: float,
    south: float,
    east: float,
    west: float,
    zoom: float | None = None,
) -> dict[str, Any]:
    """GeoJSON features for the visible viewport (simplified by zoom)."""
    engine = get_engine(request)
    try:
        collection = await engine.bbox_features(north, south, east, west, zoom)
    except (ValidationError, StoreError) as exc:
        raise translate_error(exc)
    return {"data": collection.model_dump(by_alias=True), "count": len(collection.features)}


@router.get("/list")
async def list_parcels_in_bbox(
    request: Request,
    north: float,
    south: float,
    east: float,
    west: float,
) -> dict[str, Any]:
    """Attribute-only parcel rows for the visible viewport."""
    engine = get_engine(request)
    try:
        parcels = await engine.bbox_list(north, south, east, west)
    except (ValidationError, StoreError) as exc:
        raise translate_error(exc)
    return {"data": [p.model_dump(by_alias=True) for p in parcels], "count": len(parcels)}


@router.post("/search")
async def search_parcels(
    request: Request,
    body: dict[str, Any] = Body(default_factory=dict),
) -> dict[str, Any]:
    """Filtered, paginated parcel search."""
    engine = get_engine(request)
    try:
        page = await engine.search(body)
    except (ValidationError, StoreError) as exc:
        raise translate_error(exc)
    return {
        "data": [r.model_dump(by_alias=True) for r in page.rows],
        "pagination": {
            "total": page.total,
            "limit": page.limit,
            "offset": page.offset,
            "hasMore": page.has_more,
        },
    }


@router.get("/nearby")
async def parcels_near_point(
    request: Request,
    lat: float,
    lng: float,
    radius: float | None = None,
    limit: int | None = None,
) -> dict[str, Any]:
    """Parcels within ``radius`` meters of a point, closest first."""
    engine = get_engine(request)
    try:
        parcels = await engine.near_point(lat, lng, radius, limit)
    except (ValidationError, StoreError) as exc:
        raise translate_error(exc)
    return {"data": [p.model_dump(by_alias=True) for p in parcels], "count": len(parcels)}


@router.get("/stats")
async def parcel_stats(request: Request) -> dict[str, Any]:
    engine = get_engine(request)
    try:
        stats = await engine.stats()
    except StoreError as exc:
        raise translate_error(exc)
    return {"data": stats.model_dump(by_alias=True)}


@router.get("/{parcel_id}")
async def get_parcel(parcel_id: str, request: Request) -> dict[str, Any]:
    """Full details for one parcel."""
    engine = get_engine(request)
    try:
        parcel = await engine.get_parcel(parcel_id)
    except (ValidationError, NotFound, StoreError) as exc:
        raise translate_error(exc)
    return {"data": parcel.model_dump(mode="json", by_alias=True)}
