"""Area unit conversions.

Acres and square meters are always derived from square feet.
"""

from __future__ import annotations

import math

SQFT_PER_ACRE = 43560.0
SQM_PER_SQFT = 0.092903


def acres_from_sqft(sqft: float) -> float:
    return sqft / SQFT_PER_ACRE


def sqm_from_sqft(sqft: float) -> float:
    return sqft * SQM_PER_SQFT


def sqft_from_acres(acres: float) -> float:
    return acres * SQFT_PER_ACRE


def areas_from_sqft(sqft: float) -> tuple[float, float]:
    """Return ``(acres, sqm)`` for an area in square feet."""
    if sqft < 0 or not math.isfinite(sqft):
        raise ValueError(f"area must be a non-negative number, got {sqft!r}")
    return acres_from_sqft(sqft), sqm_from_sqft(sqft)


def areas_consistent(
    sqft: float, acres: float, sqm: float, rel_tol: float = 1e-3
) -> bool:
    """Check that the redundant area units agree within ``rel_tol``."""
    expected_acres, expected_sqm = areas_from_sqft(sqft)
    return math.isclose(acres, expected_acres, rel_tol=rel_tol, abs_tol=1e-9) and math.isclose(
        sqm, expected_sqm, rel_tol=rel_tol, abs_tol=1e-9
    )
