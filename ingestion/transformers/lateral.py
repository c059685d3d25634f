"""
Normalizers for S-57 lateral marks (BOYLAT buoys and BCNLAT beacons).
"""

from typing import Dict

from ingestion.transformers.normalizer import (
    SchemaIdentifier,
    SourceRow,
    build_properties,
    extract_point,
    parse_fidn,
)
from ingestion.transformers.s57_codes import (
    S57_BEACON_SHAPES,
    S57_BUOY_SHAPES,
    S57_COLOR_PATTERNS,
    S57_LATERAL_CATEGORIES,
    map_s57_code,
    parse_colors,
)
from models.base import MarkCategory, StructureType
from schemas.normalized import NavigationAidCreate


def _normalize_lateral(
    schema_key: str,
    row: SourceRow,
    structure_type: StructureType,
    shape_column: str,
    shapes: Dict[str, str],
) -> NavigationAidCreate:
    identifier = SchemaIdentifier(schema_key)
    geom = extract_point(row)
    fidn = parse_fidn(row)

    return NavigationAidCreate(
        source_schema=schema_key,
        source_key=identifier.source_key(fidn),
        source_fidn=fidn,
        source_object_type=identifier.object_kind,
        scale_band=identifier.scale_band,
        geom=geom,
        structure_type=structure_type.value,
        mark_category=MarkCategory.LATERAL.value,
        lateral_side=map_s57_code(row.get("catlam"), S57_LATERAL_CATEGORIES),
        name=row.get("objnam"),
        shape=map_s57_code(row.get(shape_column), shapes),
        colors=parse_colors(row.get("colour")),
        color_pattern=map_s57_code(row.get("colpat"), S57_COLOR_PATTERNS),
        has_light=False,
        properties=build_properties(
            row,
            surfaced=("fidn", "catlam", "objnam", shape_column, "colour", "colpat"),
        ),
    )


def normalize_buoy_lateral(schema_key: str, row: SourceRow) -> NavigationAidCreate:
    """BOYLAT (lateral buoy) row to navigation aid."""
    return _normalize_lateral(schema_key, row, StructureType.BUOY, "boyshp", S57_BUOY_SHAPES)


def normalize_beacon_lateral(schema_key: str, row: SourceRow) -> NavigationAidCreate:
    """BCNLAT (lateral beacon) row to navigation aid."""
    return _normalize_lateral(schema_key, row, StructureType.BEACON, "bcnshp", S57_BEACON_SHAPES)
