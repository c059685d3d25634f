"""
Shared building blocks for row normalizers.

A normalizer turns one row read from a Kart working-copy schema into one
NavigationAidCreate. The helpers here cover what every normalizer needs:
schema identifier parsing, point extraction and the properties map.
"""

import json
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Callable, Dict, Iterable, Mapping

from core.exceptions import GeometryValidationError
from schemas.normalized import GeoJSONPoint, NavigationAidCreate, PropertyValue

SourceRow = Mapping[str, Any]

# (schema_key, row) -> normalized record
Normalizer = Callable[[str, SourceRow], NavigationAidCreate]

# Column the reader renders the geometry into
GEOJSON_COLUMN = "geojson"

# Bookkeeping columns assumed when a row does not name its own
BOOKKEEPING_COLUMNS = frozenset({"pk", "shape", GEOJSON_COLUMN})


class SourceRecord(dict):
    """
    A source row that knows which of its columns are bookkeeping.

    The reader fills ``bookkeeping_columns`` with the table's primary key
    and raw geometry columns; the rendered GeoJSON column is always one.
    """

    def __init__(self, values: Mapping[str, Any], bookkeeping_columns: Iterable[str] = BOOKKEEPING_COLUMNS):
        super().__init__(values)
        self.bookkeeping_columns = frozenset(bookkeeping_columns) | {GEOJSON_COLUMN}


def bookkeeping_columns(row: SourceRow) -> frozenset:
    return getattr(row, "bookkeeping_columns", BOOKKEEPING_COLUMNS)


@dataclass(frozen=True)
class SchemaIdentifier:
    """
    A schema key of the form ``category__objectkind__scale``.

    Missing segments degrade to "unknown" instead of raising, so a record
    is still attributable to its schema.
    """

    key: str

    @property
    def _parts(self):
        return self.key.split("__")

    @property
    def category(self) -> str:
        parts = self._parts
        return parts[0] if parts[0] else "unknown"

    @property
    def object_kind(self) -> str:
        parts = self._parts
        if len(parts) > 1 and parts[1]:
            return parts[1].upper()
        return "UNKNOWN"

    @property
    def scale_band(self) -> str:
        parts = self._parts
        if len(parts) > 2 and parts[2]:
            return parts[2]
        return "unknown"

    def source_key(self, fidn: int) -> str:
        return f"{self.key}:{fidn}"

    def __str__(self) -> str:
        return self.key


def parse_fidn(row: SourceRow) -> int:
    """Feature id as an integer; raises ValueError when it is not one."""
    value = row.get("fidn")
    if value is None:
        raise ValueError("Row has no fidn")
    if isinstance(value, bool):
        raise ValueError(f"Invalid fidn: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, Decimal):
        if value.is_finite() and value == value.to_integral_value():
            return int(value)
        raise ValueError(f"Invalid fidn: {value!r}")
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise ValueError(f"Invalid fidn: {value!r}")

    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        number = float(text)
        if number.is_integer():
            return int(number)
        raise ValueError(f"Invalid fidn: {value!r}")


def extract_point(row: SourceRow) -> GeoJSONPoint:
    """
    Read the pre-rendered GeoJSON point of a row.

    Raises:
        GeometryValidationError: If the row has no usable coordinate pair
    """
    geojson = row.get(GEOJSON_COLUMN)
    if isinstance(geojson, (str, bytes)):
        try:
            geojson = json.loads(geojson)
        except ValueError:
            geojson = None

    coordinates = geojson.get("coordinates") if isinstance(geojson, Mapping) else None
    if not coordinates or len(coordinates) < 2 or coordinates[0] is None or coordinates[1] is None:
        raise GeometryValidationError(
            f"Missing geometry for row with fidn: {row.get('fidn')}",
            context={"fidn": row.get("fidn")}
        )

    return GeoJSONPoint(coordinates=(float(coordinates[0]), float(coordinates[1])))


def to_property_value(value: Any) -> PropertyValue:
    """Coerce a database value into the scalar kinds properties may hold."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex()
    return str(value)


def build_properties(row: SourceRow, surfaced: Iterable[str] = ()) -> Dict[str, PropertyValue]:
    """
    Collect the source attributes that have no typed column.

    Bookkeeping columns (primary key, raw geometry, rendered GeoJSON),
    columns already surfaced as typed fields and null values are left out.
    Column order is preserved.
    """
    excluded = bookkeeping_columns(row) | set(surfaced)
    return {
        key: to_property_value(value)
        for key, value in row.items()
        if key not in excluded and value is not None
    }
