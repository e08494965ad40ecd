"""Parcel query operations exposed to the assistant as callable tools.

The assistant's model client is an external collaborator. It receives
``TOOL_DEFINITIONS`` and sends back a tool name and arguments; the
dispatcher runs the matching engine operation and reports which parcels
matched so the map can highlight them.
"""

from __future__ import annotations

import logging
from typing import Any

import pydantic
from pydantic import BaseModel, Field

from landscore.core.errors import UnknownTool, ValidationError
from landscore.core.types import CroplandClass, SoilType, ToolDefinition, ZoningCode
from landscore.parcels.models import ResultModel
from landscore.query.engine import ParcelQueryEngine
from landscore.query.filters import ParcelFilter, format_validation_error

logger = logging.getLogger(__name__)

TOOL_VERSION = "1.0.0"
DEFAULT_TOOL_SEARCH_LIMIT = 10
DEFAULT_TOOL_RADIUS_METERS = 1000.0
DEFAULT_TOOL_NEARBY_LIMIT = 10


class NearLocationArgs(BaseModel):
    latitude: float = Field(description="Latitude of the center point")
    longitude: float = Field(description="Longitude of the center point")
    radius_meters: float = Field(
        default=DEFAULT_TOOL_RADIUS_METERS, description="Search radius in meters"
    )
    limit: int = Field(default=DEFAULT_TOOL_NEARBY_LIMIT, description="Maximum number of results")


class ToolResult(ResultModel):
    """Outcome of one tool call; ``parcel_ids`` lets the map highlight matches."""

    tool: str
    result: dict[str, Any] | list[dict[str, Any]]
    parcel_ids: list[str] = Field(default_factory=list)


def _search_schema() -> dict[str, Any]:
    schema = ParcelFilter.model_json_schema(by_alias=False)
    props = schema.get("properties", {})
    hints = {
        "zoning_codes": [z.value for z in ZoningCode],
        "soil_types": [s.value for s in SoilType],
        "cropland_classes": [c.value for c in CroplandClass],
    }
    for name, values in hints.items():
        if name in props:
            props[name]["description"] = f"Any of: {', '.join(values)}"
    return schema


TOOL_DEFINITIONS: dict[str, ToolDefinition] = {
    "search_parcels": ToolDefinition(
        id="parcels.search",
        name="search_parcels",
        description=(
            "Search for land parcels by area, price, soil type, zoning, cropland "
            "class, water/road access and city"
        ),
        version=TOOL_VERSION,
        input_schema=_search_schema(),
    ),
    "get_parcel_stats": ToolDefinition(
        id="parcels.stats",
        name="get_parcel_stats",
        description=(
            "Get overall parcel statistics including counts, average prices "
            "and zoning breakdown"
        ),
        version=TOOL_VERSION,
        input_schema={"type": "object", "properties": {}},
    ),
    "get_parcels_near_location": ToolDefinition(
        id="parcels.near",
        name="get_parcels_near_location",
        description="Find parcels near a specific location, closest first",
        version=TOOL_VERSION,
        input_schema=NearLocationArgs.model_json_schema(),
    ),
}


class ParcelToolDispatcher:
    """Routes assistant tool calls to an injected ``ParcelQueryEngine``."""

    def __init__(self, engine: ParcelQueryEngine) -> None:
        self._engine = engine

    @property
    def definitions(self) -> list[ToolDefinition]:
        return list(TOOL_DEFINITIONS.values())

    async def dispatch(self, name: str, args: dict[str, Any] | None = None) -> ToolResult:
        args = dict(args or {})
        if name not in TOOL_DEFINITIONS:
            raise UnknownTool(f"Unknown tool: {name!r}")
        logger.info("Dispatching assistant tool %s", name)

        if name == "search_parcels":
            args.setdefault("limit", DEFAULT_TOOL_SEARCH_LIMIT)
            page = await self._engine.search(args)
            return ToolResult(
                tool=name,
                result=page.model_dump(by_alias=True),
                parcel_ids=[r.id for r in page.rows],
            )

        if name == "get_parcel_stats":
            stats = await self._engine.stats()
            return ToolResult(tool=name, result=stats.model_dump(by_alias=True))

        try:
            near = NearLocationArgs.model_validate(args)
        except pydantic.ValidationError as exc:
            raise ValidationError(
                f"Invalid arguments for {name}: {format_validation_error(exc)}"
            ) from None
        parcels = await self._engine.near_point(
            near.latitude, near.longitude, near.radius_meters, near.limit
        )
        return ToolResult(
            tool=name,
            result=[p.model_dump(by_alias=True) for p in parcels],
            parcel_ids=[p.id for p in parcels],
        )
