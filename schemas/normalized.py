"""
Pydantic schemas for normalized navigation-aid records with validation
"""

from decimal import Decimal
from pydantic import BaseModel, Field, field_validator
from typing import Dict, List, Literal, Optional, Tuple, Union

# Closed set of value kinds allowed in the open-ended properties map
PropertyValue = Union[bool, int, float, str, None]


class GeoJSONPoint(BaseModel):
    """WGS84 point as (longitude, latitude)"""
    type: Literal["Point"] = "Point"
    coordinates: Tuple[float, float]

    @property
    def longitude(self) -> float:
        return self.coordinates[0]

    @property
    def latitude(self) -> float:
        return self.coordinates[1]


class NavigationAidCreate(BaseModel):
    """
    One normalized navigation aid, ready for upsert.

    Ensures:
    - source_key is derived as "{source_schema}:{source_fidn}"
    - geometry is a concrete point
    - properties only hold scalar values
    """

    # Source tracking (required)
    source_schema: str = Field(..., min_length=1)
    source_key: str = Field(..., min_length=1)
    source_fidn: int
    source_object_type: str
    scale_band: str

    geom: GeoJSONPoint

    # Classification
    structure_type: str
    mark_category: str
    lateral_side: Optional[str] = None

    # Appearance
    name: Optional[str] = None
    shape: Optional[str] = None
    colors: Optional[List[str]] = None
    color_pattern: Optional[str] = None
    topmark_shape: Optional[str] = None
    topmark_color: Optional[str] = None

    # Light
    has_light: bool = False
    light_characteristic: Optional[str] = None
    light_color: Optional[str] = None
    light_range_nm: Optional[Decimal] = None
    light_elevation_m: Optional[Decimal] = None

    properties: Dict[str, PropertyValue] = Field(default_factory=dict)

    @field_validator("colors")
    @classmethod
    def empty_colors_to_none(cls, v):
        """An empty color list carries no information"""
        return v or None

    def to_row(self) -> Dict[str, object]:
        """Column values for navigation_aids, geometry excluded."""
        return self.model_dump(exclude={"geom"})
