"""
Load normalized navigation aids into PostgreSQL with upsert logic (idempotency)
"""

import json
from typing import Iterable
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.dialects.postgresql import insert
from core.exceptions import UpsertError
from models.navigation_aid import NavigationAid
from schemas.normalized import GeoJSONPoint, NavigationAidCreate
import logging

logger = logging.getLogger(__name__)

WGS84_SRID = 4326


def point_geometry(point: GeoJSONPoint):
    """PostGIS point built from GeoJSON with SRID 4326."""
    return func.ST_SetSRID(func.ST_GeomFromGeoJSON(json.dumps(point.model_dump())), WGS84_SRID)


class PostgresLoader:
    """
    Write navigation aids with idempotent upsert operations.

    Ensures:
    - One row per source_key, no duplicates on repeated runs
    - Every normalized column is overwritten when the source_key exists
    - The caller's transaction decides what is committed
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    def build_upsert(self, item: NavigationAidCreate):
        """INSERT ... ON CONFLICT (source_key) DO UPDATE for one record."""
        values = item.to_row()
        stmt = insert(NavigationAid).values(**values, geom=point_geometry(item.geom))

        update_set = {name: stmt.excluded[name] for name in NavigationAid.NORMALIZED_COLUMNS}
        update_set["geom"] = point_geometry(item.geom)

        return stmt.on_conflict_do_update(
            index_elements=[NavigationAid.source_key],
            set_=update_set,
        )

    async def upsert(self, item: NavigationAidCreate) -> None:
        try:
            await self.db.execute(self.build_upsert(item))
        except SQLAlchemyError as e:
            raise UpsertError(
                f"Failed to upsert {item.source_key}: {e}",
                context={"source_key": item.source_key, "table_name": "navigation_aids"},
                original_exception=e
            )

    async def load(self, items: Iterable[NavigationAidCreate]) -> int:
        """
        Upsert items in order and commit them together.

        Returns:
            Number of records upserted
        """
        loaded_count = 0

        for item in items:
            await self.upsert(item)
            loaded_count += 1

        if loaded_count:
            await self.db.commit()

        logger.info(f"Upserted {loaded_count} rows into navigation_aids")
        return loaded_count
