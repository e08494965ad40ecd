"""Paginated attribute search over parcels."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from landscore.parcels.models import ParcelListItem, SearchPage
from landscore.query.compiler import CompiledFilter, ParamBuilder, Statement, compile_filter
from landscore.query.sql import LIST_COLUMNS, PARCEL_FROM, SEARCH_ORDER

if TYPE_CHECKING:
    from landscore.query.filters import ParcelFilter
    from landscore.repositories.protocols import QueryStore

logger = logging.getLogger(__name__)


def count_statement(compiled: CompiledFilter) -> Statement:
    return compiled.statement(
        f"""
SELECT COUNT(DISTINCT p.id) AS total
{PARCEL_FROM}
WHERE {compiled.where_sql}"""
    )


def page_statement(compiled: CompiledFilter, limit: int, offset: int) -> Statement:
    b = ParamBuilder.resume(compiled)
    limit_ph = b.bind(limit)
    offset_ph = b.bind(offset)
    return b.statement(
        f"""
SELECT{LIST_COLUMNS}
{PARCEL_FROM}
WHERE {compiled.where_sql}
{SEARCH_ORDER}
LIMIT {limit_ph}
OFFSET {offset_ph}"""
    )


class FilteredSearchExecutor:
    """Runs the count and page queries from one compiled filter.

    Assumes a validated ``ParcelFilter``. Store errors propagate.
    """

    def __init__(self, store: QueryStore) -> None:
        self._store = store

    async def search(self, flt: ParcelFilter) -> SearchPage:
        compiled = compile_filter(flt)

        count_row = await self._store.fetch_one(count_statement(compiled))
        total = int(count_row["total"]) if count_row and count_row["total"] is not None else 0

        rows = await self._store.fetch_all(page_statement(compiled, flt.limit, flt.offset))
        items = [ParcelListItem.from_row(r) for r in rows]

        logger.debug(
            "Search with %d conditions: %d total, %d on page (offset %d)",
            len(compiled.conditions),
            total,
            len(items),
            flt.offset,
        )
        return SearchPage(
            rows=items,
            total=total,
            limit=flt.limit,
            offset=flt.offset,
            has_more=flt.offset + len(items) < total,
        )
