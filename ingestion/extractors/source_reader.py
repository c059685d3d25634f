"""
Read rows from a Kart working-copy schema.
"""

from typing import List
import logging

from sqlalchemy import cast, column, func, literal_column, select, table, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import AsyncSession

from ingestion.transformers.normalizer import GEOJSON_COLUMN, SourceRecord

logger = logging.getLogger(__name__)

# Kart keeps its own state tables (_kart_state, _kart_track, ...) in the schema
KART_TABLE_PREFIX = "_kart"

LIST_TABLES_SQL = text(
    """
    SELECT table_name
    FROM information_schema.tables
    WHERE table_schema = :schema_name
      AND table_type = 'BASE TABLE'
      AND table_name NOT LIKE :kart_prefix
    ORDER BY table_name
    """
)

PRIMARY_KEY_SQL = text(
    """
    SELECT kcu.column_name
    FROM information_schema.table_constraints tc
    JOIN information_schema.key_column_usage kcu
      ON kcu.constraint_name = tc.constraint_name
     AND kcu.table_schema = tc.table_schema
     AND kcu.table_name = tc.table_name
    WHERE tc.table_schema = :schema_name
      AND tc.table_name = :table_name
      AND tc.constraint_type = 'PRIMARY KEY'
    ORDER BY kcu.ordinal_position
    """
)


class SourceReader:
    """
    Fetch every row of every data table in a schema.

    Geometry is rendered by PostGIS as GeoJSON (``geojson`` column) next to
    the native columns, so normalizers never deal with WKB. Each row is a
    SourceRecord naming its table's primary key and raw geometry columns.
    """

    def __init__(self, db_session: AsyncSession, geometry_column: str = "shape"):
        self.db = db_session
        self.geometry_column = geometry_column

    async def list_tables(self, schema_name: str) -> List[str]:
        result = await self.db.execute(
            LIST_TABLES_SQL,
            {"schema_name": schema_name, "kart_prefix": f"{KART_TABLE_PREFIX}%"},
        )
        return [row[0] for row in result.all()]

    async def primary_key_columns(self, schema_name: str, table_name: str) -> List[str]:
        result = await self.db.execute(
            PRIMARY_KEY_SQL,
            {"schema_name": schema_name, "table_name": table_name},
        )
        return [row[0] for row in result.all()]

    async def read_table(self, schema_name: str, table_name: str) -> List[SourceRecord]:
        primary_key = await self.primary_key_columns(schema_name, table_name)
        bookkeeping = [*primary_key, self.geometry_column]

        source = table(table_name, schema=schema_name)
        geojson = cast(func.ST_AsGeoJSON(column(self.geometry_column)), JSONB).label(GEOJSON_COLUMN)
        stmt = select(literal_column("*"), geojson).select_from(source)

        result = await self.db.execute(stmt)
        return [SourceRecord(row, bookkeeping) for row in result.mappings().all()]

    async def read_schema(self, schema_name: str) -> List[SourceRecord]:
        """
        All rows of all base tables in a schema.

        Returns:
            Rows as SourceRecords; empty when the schema has no data tables
        """
        tables = await self.list_tables(schema_name)
        if not tables:
            logger.debug(f"No data tables found in schema {schema_name}")
            return []

        rows: List[SourceRecord] = []
        for table_name in tables:
            table_rows = await self.read_table(schema_name, table_name)
            logger.debug(f"Read {len(table_rows)} rows from {schema_name}.{table_name}")
            rows.extend(table_rows)

        return rows
