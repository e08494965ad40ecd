"""Error taxonomy for the parcel query engine.

Validation errors are raised before any store call. Store errors wrap the
underlying SQLAlchemy failure and are never retried by the engine.
"""

from __future__ import annotations


class ParcelQueryError(Exception):
    """Base class for all query engine errors."""


class ValidationError(ParcelQueryError, ValueError):
    """Malformed or out-of-range input."""


class InvalidBounds(ValidationError):
    """A bounding box or coordinate outside the valid range."""


class InvalidRadius(ValidationError):
    """A non-positive or non-finite search radius."""


class UnknownTool(ValidationError):
    """An assistant tool name that is not registered."""


class NotFound(ParcelQueryError, LookupError):
    """A single-entity lookup with no match."""


class ParcelNotFound(NotFound):
    def __init__(self, parcel_id: str) -> None:
        super().__init__(f"Parcel {parcel_id!r} not found")
        self.parcel_id = parcel_id


class StoreError(ParcelQueryError):
    """The underlying persistence layer failed."""
