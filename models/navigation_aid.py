from sqlalchemy import Column, Text, Integer, Boolean, Numeric, Index, text
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, UUID
from geoalchemy2 import Geometry
import uuid
from models.base import Base


class NavigationAid(Base):
    """
    Unified navigation-aid table fed by every registered normalizer.

    Schema Design:
    - source_key ("{schema}:{fidn}") is the natural key; every transform run
      upserts on it, so re-running converges instead of duplicating
    - Typed columns for the attributes shared by all mark types
    - properties (JSONB) keeps every other source attribute

    Owned by the transform stage only. Rows are fully overwritten on each
    sighting of their source_key.
    """
    __tablename__ = "navigation_aids"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Source tracking
    source_schema = Column(Text, nullable=False, index=True)
    source_key = Column(Text, nullable=False)
    source_fidn = Column(Integer, nullable=False)
    source_object_type = Column(Text, nullable=False)
    scale_band = Column(Text, nullable=False, index=True)

    geom = Column(Geometry(geometry_type="POINT", srid=4326), nullable=False)

    # Classification
    structure_type = Column(Text, nullable=False)
    mark_category = Column(Text, nullable=False)
    lateral_side = Column(Text, nullable=True)

    # Appearance
    name = Column(Text, nullable=True)
    shape = Column(Text, nullable=True)
    colors = Column(ARRAY(Text), nullable=True)
    color_pattern = Column(Text, nullable=True)
    topmark_shape = Column(Text, nullable=True)
    topmark_color = Column(Text, nullable=True)

    # Light
    has_light = Column(Boolean, nullable=False, default=False, server_default=text("false"))
    light_characteristic = Column(Text, nullable=True)
    light_color = Column(Text, nullable=True)
    light_range_nm = Column(Numeric, nullable=True)
    light_elevation_m = Column(Numeric, nullable=True)

    properties = Column(JSONB, nullable=False, default=dict, server_default=text("'{}'::jsonb"))

    __table_args__ = (
        Index("navigation_aids_source_key_idx", "source_key", unique=True),
    )

    # Every column the transform stage owns and rewrites on conflict
    NORMALIZED_COLUMNS = (
        "source_schema",
        "source_fidn",
        "source_object_type",
        "scale_band",
        "structure_type",
        "mark_category",
        "lateral_side",
        "name",
        "shape",
        "colors",
        "color_pattern",
        "topmark_shape",
        "topmark_color",
        "has_light",
        "light_characteristic",
        "light_color",
        "light_range_nm",
        "light_elevation_m",
        "properties",
    )
