"""PostGIS setup for the parcels table.

Adds the geometry column, its GiST index and the trigger that keeps the
centroid columns in step with the geometry.
"""

from __future__ import annotations

import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncConnection

logger = logging.getLogger(__name__)


def postgis_statements(srid: int = 4326) -> list[str]:
    return [
        "CREATE EXTENSION IF NOT EXISTS postgis",
        f"ALTER TABLE parcels ADD COLUMN IF NOT EXISTS geometry geometry(MultiPolygon, {int(srid)})",
        "CREATE INDEX IF NOT EXISTS idx_parcels_geometry ON parcels USING GIST (geometry)",
        """
        CREATE OR REPLACE FUNCTION update_parcel_centroid()
        RETURNS TRIGGER AS $$
        BEGIN
            IF NEW.geometry IS NOT NULL THEN
                NEW.centroid_lng := ST_X(ST_Centroid(NEW.geometry));
                NEW.centroid_lat := ST_Y(ST_Centroid(NEW.geometry));
            END IF;
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql
        """,
        "DROP TRIGGER IF EXISTS trigger_update_parcel_centroid ON parcels",
        """
        CREATE TRIGGER trigger_update_parcel_centroid
            BEFORE INSERT OR UPDATE OF geometry ON parcels
            FOR EACH ROW
            EXECUTE FUNCTION update_parcel_centroid()
        """,
    ]


async def install_postgis(conn: AsyncConnection, srid: int = 4326) -> None:
    """Run the PostGIS setup statements. Safe to call repeatedly."""
    if conn.dialect.name != "postgresql":
        logger.info("Skipping PostGIS setup on %s", conn.dialect.name)
        return
    for statement in postgis_statements(srid):
        await conn.execute(text(statement))
