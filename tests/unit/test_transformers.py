"""
Unit tests for row normalizers and their helpers
"""

import pytest
from datetime import date
from decimal import Decimal
from core.exceptions import GeometryValidationError
from ingestion.transformers.lateral import normalize_beacon_lateral, normalize_buoy_lateral
from ingestion.transformers.normalizer import (
    SchemaIdentifier,
    SourceRecord,
    build_properties,
    extract_point,
    parse_fidn,
    to_property_value,
)
from ingestion.transformers.s57_codes import S57_LATERAL_CATEGORIES, map_s57_code, parse_colors


class TestSchemaIdentifier:

    def test_full_key(self):
        identifier = SchemaIdentifier("navigation_aids__boylat__harbor")
        assert identifier.category == "navigation_aids"
        assert identifier.object_kind == "BOYLAT"
        assert identifier.scale_band == "harbor"
        assert identifier.source_key(12345) == "navigation_aids__boylat__harbor:12345"

    def test_missing_segments_degrade_to_unknown(self):
        assert SchemaIdentifier("navigation_aids__boylat").scale_band == "unknown"
        assert SchemaIdentifier("navigation_aids").object_kind == "UNKNOWN"
        assert SchemaIdentifier("").scale_band == "unknown"


class TestS57Codes:

    def test_known_and_unknown_codes(self):
        assert map_s57_code("1", S57_LATERAL_CATEGORIES) == "port"
        assert map_s57_code(" 2 ", S57_LATERAL_CATEGORIES) == "starboard"
        assert map_s57_code("99", S57_LATERAL_CATEGORIES) is None
        assert map_s57_code(None, S57_LATERAL_CATEGORIES) is None
        assert map_s57_code("", S57_LATERAL_CATEGORIES) is None

    def test_integer_code(self):
        assert map_s57_code(3, S57_LATERAL_CATEGORIES) == "preferred_channel_starboard"

    def test_parse_colors(self):
        assert parse_colors("3,6") == ["red", "yellow"]
        assert parse_colors("3, 99 ,1") == ["red", "white"]
        assert parse_colors(["4", "1"]) == ["green", "white"]

    def test_parse_colors_empty(self):
        assert parse_colors(None) is None
        assert parse_colors("") is None
        assert parse_colors("99,100") is None


class TestHelpers:

    def test_parse_fidn(self):
        assert parse_fidn({"fidn": 42}) == 42
        assert parse_fidn({"fidn": "42"}) == 42
        assert parse_fidn({"fidn": Decimal("42")}) == 42

    @pytest.mark.parametrize("fidn", [7.0, "7.0", " 7 ", Decimal("7.00"), "7e0"])
    def test_parse_fidn_accepts_integral_numbers(self, fidn):
        assert parse_fidn({"fidn": fidn}) == 7

    @pytest.mark.parametrize("fidn", [7.5, "7.5", Decimal("7.5"), float("nan"), "inf", True])
    def test_parse_fidn_rejects_fractional_and_non_numbers(self, fidn):
        with pytest.raises(ValueError):
            parse_fidn({"fidn": fidn})

    def test_parse_fidn_invalid(self):
        with pytest.raises(ValueError):
            parse_fidn({})
        with pytest.raises(ValueError):
            parse_fidn({"fidn": "abc"})

    def test_extract_point_from_mapping_and_string(self):
        point = extract_point({"geojson": {"type": "Point", "coordinates": [1.5, 2.5]}})
        assert point.longitude == 1.5
        assert point.latitude == 2.5

        point = extract_point({"geojson": '{"type": "Point", "coordinates": [3, 4]}'})
        assert point.coordinates == (3.0, 4.0)

    @pytest.mark.parametrize("geojson", [None, {}, {"coordinates": []}, "not json"])
    def test_extract_point_missing(self, geojson):
        with pytest.raises(GeometryValidationError) as exc_info:
            extract_point({"fidn": 9, "geojson": geojson})
        assert exc_info.value.message == "Missing geometry for row with fidn: 9"

    def test_to_property_value(self):
        assert to_property_value(Decimal("5")) == 5
        assert to_property_value(Decimal("5.5")) == 5.5
        assert to_property_value(date(2024, 1, 15)) == "2024-01-15"
        assert to_property_value(b"\x01\x02") == "0102"
        assert to_property_value(True) is True

    def test_build_properties_excludes_bookkeeping_surfaced_and_nulls(self, boylat_row):
        properties = build_properties(boylat_row, surfaced=("fidn", "catlam"))

        assert "pk" not in properties
        assert "shape" not in properties
        assert "geojson" not in properties
        assert "fidn" not in properties
        assert "catlam" not in properties
        assert "colpat" not in properties
        assert properties["inform"] == "Seasonal"
        assert properties["boyshp"] == "2"

    def test_build_properties_uses_the_rows_own_bookkeeping_columns(self):
        row = SourceRecord(
            {"fid": 1, "fidn": 5, "geom": "0101000020E6", "inform": "Seasonal", "geojson": {}},
            bookkeeping_columns=("fid", "geom"),
        )

        assert row.bookkeeping_columns == {"fid", "geom", "geojson"}
        assert build_properties(row, surfaced=("fidn",)) == {"inform": "Seasonal"}


class TestLateralNormalizers:

    def test_buoy_lateral(self, boylat_row):
        aid = normalize_buoy_lateral("navigation_aids__boylat__harbor", boylat_row)

        assert aid.source_schema == "navigation_aids__boylat__harbor"
        assert aid.source_key == "navigation_aids__boylat__harbor:12345"
        assert aid.source_fidn == 12345
        assert aid.source_object_type == "BOYLAT"
        assert aid.scale_band == "harbor"
        assert aid.structure_type == "buoy"
        assert aid.mark_category == "lateral"
        assert aid.lateral_side == "port"
        assert aid.shape == "can"
        assert aid.colors == ["red"]
        assert aid.color_pattern is None
        assert aid.name == "Red Can 4"
        assert aid.has_light is False
        assert aid.geom.coordinates == (174.7762, -41.2865)
        assert aid.properties == {"inform": "Seasonal"}

    def test_beacon_lateral(self, bcnlat_row):
        aid = normalize_beacon_lateral("navigation_aids__bcnlat__coastal", bcnlat_row)

        assert aid.source_key == "navigation_aids__bcnlat__coastal:678"
        assert aid.source_object_type == "BCNLAT"
        assert aid.scale_band == "coastal"
        assert aid.structure_type == "beacon"
        assert aid.lateral_side == "starboard"
        assert aid.shape == "stake"
        assert aid.colors == ["green", "white"]
        assert aid.color_pattern == "horizontal"
        assert aid.name is None
        assert aid.properties == {"scamin": 22000}

    def test_unknown_codes_become_none(self, boylat_row):
        boylat_row.update({"catlam": "99", "boyshp": "77", "colour": "50"})
        aid = normalize_buoy_lateral("navigation_aids__boylat__harbor", boylat_row)

        assert aid.lateral_side is None
        assert aid.shape is None
        assert aid.colors is None

    def test_missing_geometry_raises(self, boylat_row):
        boylat_row["geojson"] = None
        with pytest.raises(GeometryValidationError, match="fidn: 12345"):
            normalize_buoy_lateral("navigation_aids__boylat__harbor", boylat_row)

    def test_float_fidn_from_double_precision_column(self, boylat_row):
        boylat_row["fidn"] = 7.0
        aid = normalize_buoy_lateral("navigation_aids__boylat__harbor", boylat_row)

        assert aid.source_fidn == 7
        assert aid.source_key == "navigation_aids__boylat__harbor:7"

    def test_to_row_excludes_geometry(self, boylat_row):
        aid = normalize_buoy_lateral("navigation_aids__boylat__harbor", boylat_row)
        row = aid.to_row()

        assert "geom" not in row
        assert row["source_key"] == "navigation_aids__boylat__harbor:12345"
