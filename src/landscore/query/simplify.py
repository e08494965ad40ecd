"""Zoom-dependent geometry simplification tolerance."""

from __future__ import annotations

import math

DEFAULT_ZOOM = 12

# (exclusive upper zoom bound, tolerance in degrees), coarsest first.
_BANDS: tuple[tuple[float, float], ...] = (
    (10, 0.001),
    (14, 0.0001),
)
_NEAR_TOLERANCE = 0.00001


def tolerance_for_zoom(zoom: float | None = None) -> float:
    """Return the ``ST_SimplifyPreserveTopology`` tolerance for a map zoom.

    Lower zoom levels (zoomed out) get a coarser tolerance. Out-of-range
    values, including infinities, fall into the nearest band instead of
    failing; NaN uses the default zoom.
    """
    if zoom is None or math.isnan(zoom):
        zoom = DEFAULT_ZOOM
    for upper, tolerance in _BANDS:
        if zoom < upper:
            return tolerance
    return _NEAR_TOLERANCE
