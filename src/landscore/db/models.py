"""SQLAlchemy ORM models for all persistent tables.

The PostGIS ``parcels.geometry`` column is not mapped here. It is added by
``landscore.db.postgis`` (and the initial alembic revision) so that the ORM
tables can also be created on SQLite for tests.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from landscore.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Owners
# ---------------------------------------------------------------------------


class OwnerRow(Base):
    __tablename__ = "owners"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(256))
    owner_type: Mapped[str] = mapped_column(String(32))
    mailing_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    email: Mapped[str | None] = mapped_column(String(256), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    parcels: Mapped[list[ParcelRow]] = relationship(back_populates="owner")


# ---------------------------------------------------------------------------
# Parcels
# ---------------------------------------------------------------------------


class ParcelRow(Base):
    __tablename__ = "parcels"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    parcel_id: Mapped[str] = mapped_column(String(64), unique=True)
    apn: Mapped[str | None] = mapped_column(String(64), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    city: Mapped[str | None] = mapped_column(String(128), nullable=True)
    state: Mapped[str | None] = mapped_column(String(64), nullable=True)
    zip_code: Mapped[str | None] = mapped_column(String(16), nullable=True)
    country: Mapped[str] = mapped_column(String(64), default="USA")
    area_sqft: Mapped[float] = mapped_column(Float)
    area_acres: Mapped[float] = mapped_column(Float)
    area_sqm: Mapped[float] = mapped_column(Float)
    geometry_json: Mapped[str | None] = mapped_column(Text, nullable=True)
    centroid_lat: Mapped[float | None] = mapped_column(Float, nullable=True)
    centroid_lng: Mapped[float | None] = mapped_column(Float, nullable=True)
    owner_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("owners.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    owner: Mapped[OwnerRow | None] = relationship(back_populates="parcels")
    land_data: Mapped[LandDataRow | None] = relationship(
        back_populates="parcel", cascade="all, delete-orphan", uselist=False
    )
    valuations: Mapped[list[ValuationRow]] = relationship(
        back_populates="parcel",
        cascade="all, delete-orphan",
        order_by="ValuationRow.valuation_date.desc()",
    )

    __table_args__ = (
        Index("ix_parcels_city", "city"),
        Index("ix_parcels_owner_id", "owner_id"),
        Index("ix_parcels_centroid", "centroid_lat", "centroid_lng"),
    )


# ---------------------------------------------------------------------------
# Land data (0..1 per parcel)
# ---------------------------------------------------------------------------


class LandDataRow(Base):
    __tablename__ = "land_data"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    parcel_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("parcels.id", ondelete="CASCADE"), unique=True
    )
    soil_type: Mapped[str | None] = mapped_column(String(32), nullable=True)
    soil_quality: Mapped[int | None] = mapped_column(Integer, nullable=True)
    cropland_class: Mapped[str | None] = mapped_column(String(32), nullable=True)
    irrigation_type: Mapped[str | None] = mapped_column(String(32), nullable=True)
    zoning_code: Mapped[str | None] = mapped_column(String(32), nullable=True)
    zoning_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    land_use_code: Mapped[str | None] = mapped_column(String(32), nullable=True)
    elevation: Mapped[float | None] = mapped_column(Float, nullable=True)
    slope: Mapped[float | None] = mapped_column(Float, nullable=True)
    flood_zone: Mapped[str | None] = mapped_column(String(16), nullable=True)
    has_water_access: Mapped[bool] = mapped_column(Boolean, default=False)
    has_road_access: Mapped[bool] = mapped_column(Boolean, default=True)
    has_utilities: Mapped[bool] = mapped_column(Boolean, default=False)
    distance_to_water: Mapped[float | None] = mapped_column(Float, nullable=True)
    distance_to_road: Mapped[float | None] = mapped_column(Float, nullable=True)

    parcel: Mapped[ParcelRow] = relationship(back_populates="land_data")

    __table_args__ = (
        Index("ix_land_data_zoning_code", "zoning_code"),
    )


# ---------------------------------------------------------------------------
# Valuations (0..n per parcel)
# ---------------------------------------------------------------------------


class ValuationRow(Base):
    __tablename__ = "valuations"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    parcel_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("parcels.id", ondelete="CASCADE")
    )
    estimated_price: Mapped[float] = mapped_column(Float)
    tax_assessed_value: Mapped[float | None] = mapped_column(Float, nullable=True)
    market_value: Mapped[float | None] = mapped_column(Float, nullable=True)
    price_per_sqft: Mapped[float | None] = mapped_column(Float, nullable=True)
    price_per_acre: Mapped[float | None] = mapped_column(Float, nullable=True)
    last_sale_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    last_sale_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    valuation_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    valuation_source: Mapped[str | None] = mapped_column(String(64), nullable=True)
    confidence: Mapped[float | None] = mapped_column(Float, nullable=True)

    parcel: Mapped[ParcelRow] = relationship(back_populates="valuations")

    __table_args__ = (
        Index("ix_valuations_parcel_id", "parcel_id"),
        Index("ix_valuations_estimated_price", "estimated_price"),
    )
