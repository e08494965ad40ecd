"""Structured parcel search filter."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from landscore.core.errors import ValidationError

MAX_LIMIT = 500
DEFAULT_LIMIT = 100


def format_validation_error(exc: pydantic.ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


class ParcelFilter(BaseModel):
    """Optional attribute constraints plus pagination.

    Accepts both snake_case and camelCase keys. Set fields also accept a
    comma-separated string. Empty sets mean "no constraint".
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )

    min_area_acres: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    max_area_acres: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    min_price: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    max_price: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    zoning_codes: tuple[str, ...] | None = None
    soil_types: tuple[str, ...] | None = None
    cropland_classes: tuple[str, ...] | None = None
    has_water_access: bool | None = None
    has_road_access: bool | None = None
    city: str | None = None
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)
    offset: int = Field(default=0, ge=0)

    @field_validator("zoning_codes", "soil_types", "cropland_classes", mode="before")
    @classmethod
    def _split_codes(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.split(",")
        if isinstance(value, (list, tuple)):
            codes = (str(v).strip() for v in value if v is not None)
            return tuple(c for c in codes if c)
        return value

    @field_validator("city", mode="before")
    @classmethod
    def _blank_city(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @model_validator(mode="after")
    def _check_ranges(self) -> ParcelFilter:
        if (
            self.min_area_acres is not None
            and self.max_area_acres is not None
            and self.min_area_acres > self.max_area_acres
        ):
            raise ValueError("min_area_acres must not exceed max_area_acres")
        if (
            self.min_price is not None
            and self.max_price is not None
            and self.min_price > self.max_price
        ):
            raise ValueError("min_price must not exceed max_price")
        return self

    @classmethod
    def parse(cls, data: Mapping[str, Any] | None = None, **overrides: Any) -> ParcelFilter:
        """Validate raw caller input, raising the engine's ValidationError."""
        payload = dict(data or {})
        payload.update(overrides)
        try:
            return cls.model_validate(payload)
        except pydantic.ValidationError as exc:
            raise ValidationError(format_validation_error(exc)) from None
