"""Validated spatial inputs: viewport bounding boxes and radius queries."""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict

from landscore.core.errors import InvalidBounds, InvalidRadius, ValidationError

MAX_NEARBY_LIMIT = 500


def _finite(name: str, value: Any, error: type[ValidationError]) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise error(f"{name} must be a number, got {value!r}") from None
    if not math.isfinite(number):
        raise error(f"{name} must be finite, got {value!r}")
    return number


def _check_lat(name: str, value: float) -> None:
    if not -90.0 <= value <= 90.0:
        raise InvalidBounds(f"{name} must be within [-90, 90], got {value}")


def _check_lng(name: str, value: float) -> None:
    if not -180.0 <= value <= 180.0:
        raise InvalidBounds(f"{name} must be within [-180, 180], got {value}")


def _zoom(value: Any) -> float | None:
    """Zoom never fails validation; an unreadable value means the default band."""
    if value is None:
        return None
    try:
        zoom = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(zoom) else zoom


class BoundingBox(BaseModel):
    """A map viewport in WGS84 degrees."""

    model_config = ConfigDict(frozen=True)

    north: float
    south: float
    east: float
    west: float
    zoom: float | None = None

    @classmethod
    def from_edges(
        cls,
        north: Any,
        south: Any,
        east: Any,
        west: Any,
        zoom: Any = None,
    ) -> BoundingBox:
        n = _finite("north", north, InvalidBounds)
        s = _finite("south", south, InvalidBounds)
        e = _finite("east", east, InvalidBounds)
        w = _finite("west", west, InvalidBounds)
        _check_lat("north", n)
        _check_lat("south", s)
        _check_lng("east", e)
        _check_lng("west", w)
        if n <= s:
            raise InvalidBounds(f"north ({n}) must be greater than south ({s})")
        if e <= w:
            raise InvalidBounds(f"east ({e}) must be greater than west ({w})")

        return cls(north=n, south=s, east=e, west=w, zoom=_zoom(zoom))


class RadiusQuery(BaseModel):
    """A centre point, radius in meters and result limit."""

    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float
    radius_meters: float
    limit: int

    @classmethod
    def from_params(
        cls,
        lat: Any,
        lng: Any,
        radius_meters: Any,
        limit: Any = 20,
    ) -> RadiusQuery:
        la = _finite("lat", lat, InvalidBounds)
        ln = _finite("lng", lng, InvalidBounds)
        _check_lat("lat", la)
        _check_lng("lng", ln)
        radius = _finite("radius_meters", radius_meters, InvalidRadius)
        if radius <= 0:
            raise InvalidRadius(f"radius_meters must be positive, got {radius}")
        try:
            n = int(limit)
        except (TypeError, ValueError):
            raise ValidationError(f"limit must be an integer, got {limit!r}") from None
        if not 1 <= n <= MAX_NEARBY_LIMIT:
            raise ValidationError(f"limit must be within [1, {MAX_NEARBY_LIMIT}], got {n}")
        return cls(lat=la, lng=ln, radius_meters=radius, limit=n)
