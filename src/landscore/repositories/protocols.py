"""Protocol definitions for the persistence collaborator."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from landscore.parcels.models import ParcelDetails
    from landscore.query.compiler import Statement


@runtime_checkable
class QueryStore(Protocol):
    """Executes compiled read statements and returns plain mappings."""

    @property
    def is_spatial(self) -> bool: ...

    async def fetch_all(self, statement: Statement) -> list[Mapping[str, Any]]: ...

    async def fetch_one(self, statement: Statement) -> Mapping[str, Any] | None: ...


@runtime_checkable
class ParcelRepository(Protocol):
    """Single-parcel lookups."""

    async def get_parcel(self, parcel_id: str) -> ParcelDetails | None: ...
