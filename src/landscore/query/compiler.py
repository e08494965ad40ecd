"""Compile parcel filters into parameterized SQL conditions.

Every condition is bound to exactly one placeholder. Placeholders are named
``:p1``, ``:p2``, ... from a single running counter, so a fragment and its
value are always appended together and callers that add LIMIT/OFFSET
placeholders continue from ``next_index`` without colliding.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from landscore.query.filters import ParcelFilter

PARAM_PREFIX = "p"


def param_name(index: int) -> str:
    return f"{PARAM_PREFIX}{index}"


@dataclass(frozen=True)
class BoundValue:
    index: int
    value: Any
    expanding: bool = False

    @property
    def name(self) -> str:
        return param_name(self.index)


@dataclass(frozen=True)
class Condition:
    """One rendered WHERE fragment and the single value it binds."""

    fragment: str
    index: int
    value: Any
    expanding: bool = False


@dataclass(frozen=True)
class Statement:
    """SQL text plus its bound parameters, ready for the store."""

    sql: str
    params: Mapping[str, Any] = field(default_factory=dict)
    expanding: frozenset[str] = frozenset()


@dataclass(frozen=True)
class CompiledFilter:
    conditions: tuple[Condition, ...]
    next_index: int

    @property
    def values(self) -> list[Any]:
        return [c.value for c in self.conditions]

    @property
    def indices(self) -> list[int]:
        return [c.index for c in self.conditions]

    @property
    def params(self) -> dict[str, Any]:
        return {param_name(c.index): c.value for c in self.conditions}

    @property
    def expanding(self) -> frozenset[str]:
        return frozenset(param_name(c.index) for c in self.conditions if c.expanding)

    @property
    def where_sql(self) -> str:
        if not self.conditions:
            return "1=1"
        return " AND ".join(c.fragment for c in self.conditions)

    def statement(self, sql: str) -> Statement:
        return Statement(sql=sql, params=self.params, expanding=self.expanding)


class ParamBuilder:
    """Running placeholder counter for one SQL statement."""

    def __init__(self, start: int = 1) -> None:
        if start < 1:
            raise ValueError("placeholder indices start at 1")
        self._next = start
        self._bound: list[BoundValue] = []
        self._conditions: list[Condition] = []

    @classmethod
    def resume(cls, compiled: CompiledFilter) -> ParamBuilder:
        """Continue numbering after a compiled filter, keeping its values."""
        builder = cls(start=compiled.next_index)
        for cond in compiled.conditions:
            builder._bound.append(BoundValue(cond.index, cond.value, cond.expanding))
            builder._conditions.append(cond)
        return builder

    @property
    def next_index(self) -> int:
        return self._next

    def bind(self, value: Any, *, expanding: bool = False) -> str:
        """Bind ``value`` to the next placeholder and return its SQL name."""
        bound = BoundValue(self._next, value, expanding)
        self._bound.append(bound)
        self._next += 1
        return f":{bound.name}"

    def where(self, template: str, value: Any, *, expanding: bool = False) -> Condition:
        """Append a condition; ``template`` holds a single ``{param}`` slot."""
        index = self._next
        placeholder = self.bind(value, expanding=expanding)
        condition = Condition(template.format(param=placeholder), index, value, expanding)
        self._conditions.append(condition)
        return condition

    def build(self) -> CompiledFilter:
        return CompiledFilter(conditions=tuple(self._conditions), next_index=self._next)

    def statement(self, sql: str) -> Statement:
        return Statement(
            sql=sql,
            params={b.name: b.value for b in self._bound},
            expanding=frozenset(b.name for b in self._bound if b.expanding),
        )


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def compile_filter(flt: ParcelFilter) -> CompiledFilter:
    """Turn a validated filter into ANDed conditions.

    Numbering always starts at ``:p1``. Absent fields and empty sets emit
    nothing. Pagination is not part of the compiled conditions; callers bind
    LIMIT/OFFSET after ``next_index``.
    """
    b = ParamBuilder()

    if flt.min_area_acres is not None:
        b.where("p.area_acres >= {param}", flt.min_area_acres)
    if flt.max_area_acres is not None:
        b.where("p.area_acres <= {param}", flt.max_area_acres)
    if flt.min_price is not None:
        b.where("v.estimated_price >= {param}", flt.min_price)
    if flt.max_price is not None:
        b.where("v.estimated_price <= {param}", flt.max_price)
    if flt.zoning_codes:
        b.where("ld.zoning_code IN {param}", list(flt.zoning_codes), expanding=True)
    if flt.soil_types:
        b.where("ld.soil_type IN {param}", list(flt.soil_types), expanding=True)
    if flt.cropland_classes:
        b.where("ld.cropland_class IN {param}", list(flt.cropland_classes), expanding=True)
    if flt.has_water_access is not None:
        b.where("ld.has_water_access = {param}", flt.has_water_access)
    if flt.has_road_access is not None:
        b.where("ld.has_road_access = {param}", flt.has_road_access)
    if flt.city:
        b.where(
            "LOWER(p.city) LIKE LOWER({param}) ESCAPE '\\'",
            f"%{_escape_like(flt.city)}%",
        )

    return b.build()
