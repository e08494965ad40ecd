"""Initial schema: owners, parcels, land data, valuations and PostGIS geometry.

Revision ID: 0001
Revises:
Create Date: 2026-10-17

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from landscore.db.postgis import postgis_statements

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # -- Owners --
    op.create_table(
        "owners",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(256), nullable=False),
        sa.Column("owner_type", sa.String(32), nullable=False),
        sa.Column("mailing_address", sa.Text, nullable=True),
        sa.Column("phone", sa.String(64), nullable=True),
        sa.Column("email", sa.String(256), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )

    # -- Parcels --
    op.create_table(
        "parcels",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("parcel_id", sa.String(64), nullable=False, unique=True),
        sa.Column("apn", sa.String(64), nullable=True),
        sa.Column("address", sa.Text, nullable=True),
        sa.Column("city", sa.String(128), nullable=True),
        sa.Column("state", sa.String(64), nullable=True),
        sa.Column("zip_code", sa.String(16), nullable=True),
        sa.Column("country", sa.String(64), server_default="USA"),
        sa.Column("area_sqft", sa.Float, nullable=False),
        sa.Column("area_acres", sa.Float, nullable=False),
        sa.Column("area_sqm", sa.Float, nullable=False),
        sa.Column("geometry_json", sa.Text, nullable=True),
        sa.Column("centroid_lat", sa.Float, nullable=True),
        sa.Column("centroid_lng", sa.Float, nullable=True),
        sa.Column(
            "owner_id",
            sa.String(64),
            sa.ForeignKey("owners.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_parcels_city", "parcels", ["city"])
    op.create_index("ix_parcels_owner_id", "parcels", ["owner_id"])
    op.create_index("ix_parcels_centroid", "parcels", ["centroid_lat", "centroid_lng"])

    # -- Land data --
    op.create_table(
        "land_data",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column(
            "parcel_id",
            sa.String(64),
            sa.ForeignKey("parcels.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("soil_type", sa.String(32), nullable=True),
        sa.Column("soil_quality", sa.Integer, nullable=True),
        sa.Column("cropland_class", sa.String(32), nullable=True),
        sa.Column("irrigation_type", sa.String(32), nullable=True),
        sa.Column("zoning_code", sa.String(32), nullable=True),
        sa.Column("zoning_description", sa.Text, nullable=True),
        sa.Column("land_use_code", sa.String(32), nullable=True),
        sa.Column("elevation", sa.Float, nullable=True),
        sa.Column("slope", sa.Float, nullable=True),
        sa.Column("flood_zone", sa.String(16), nullable=True),
        sa.Column("has_water_access", sa.Boolean, server_default=sa.false()),
        sa.Column("has_road_access", sa.Boolean, server_default=sa.true()),
        sa.Column("has_utilities", sa.Boolean, server_default=sa.false()),
        sa.Column("distance_to_water", sa.Float, nullable=True),
        sa.Column("distance_to_road", sa.Float, nullable=True),
    )
    op.create_index("ix_land_data_zoning_code", "land_data", ["zoning_code"])

    # -- Valuations --
    op.create_table(
        "valuations",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column(
            "parcel_id",
            sa.String(64),
            sa.ForeignKey("parcels.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("estimated_price", sa.Float, nullable=False),
        sa.Column("tax_assessed_value", sa.Float, nullable=True),
        sa.Column("market_value", sa.Float, nullable=True),
        sa.Column("price_per_sqft", sa.Float, nullable=True),
        sa.Column("price_per_acre", sa.Float, nullable=True),
        sa.Column("last_sale_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_sale_price", sa.Float, nullable=True),
        sa.Column("valuation_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("valuation_source", sa.String(64), nullable=True),
        sa.Column("confidence", sa.Float, nullable=True),
    )
    op.create_index("ix_valuations_parcel_id", "valuations", ["parcel_id"])
    op.create_index("ix_valuations_estimated_price", "valuations", ["estimated_price"])

    # -- PostGIS geometry, index and centroid trigger --
    if op.get_bind().dialect.name == "postgresql":
        for statement in postgis_statements():
            op.execute(statement)


def downgrade() -> None:
    if op.get_bind().dialect.name == "postgresql":
        op.execute("DROP TRIGGER IF EXISTS trigger_update_parcel_centroid ON parcels")
        op.execute("DROP FUNCTION IF EXISTS update_parcel_centroid()")
    op.drop_table("valuations")
    op.drop_table("land_data")
    op.drop_table("parcels")
    op.drop_table("owners")
