"""
Pydantic schemas for API request/response models
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
from datetime import datetime, timezone
from uuid import UUID


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================================
# Health Check Schemas
# ============================================================================

class HealthResponse(BaseModel):
    """Health check response model"""
    status: str = Field("ok", description="Service status")
    running: bool = Field(..., description="Whether a pipeline run is in flight")
    database_connected: bool
    timestamp: datetime = Field(default_factory=_utcnow)

    class Config:
        json_schema_extra = {
            "example": {
                "status": "ok",
                "running": False,
                "database_connected": True,
                "timestamp": "2024-01-15T10:30:00Z"
            }
        }


# ============================================================================
# Navigation Aid Query Schemas
# ============================================================================

class NavigationAidResponse(BaseModel):
    """Response model for one navigation aid"""
    id: UUID
    source_schema: str
    source_key: str
    source_fidn: int
    source_object_type: str
    scale_band: str

    longitude: float
    latitude: float

    structure_type: str
    mark_category: str
    lateral_side: Optional[str] = None
    name: Optional[str] = None
    shape: Optional[str] = None
    colors: Optional[List[str]] = None
    color_pattern: Optional[str] = None
    topmark_shape: Optional[str] = None
    topmark_color: Optional[str] = None

    has_light: bool = False
    light_characteristic: Optional[str] = None
    light_color: Optional[str] = None
    light_range_nm: Optional[float] = None
    light_elevation_m: Optional[float] = None

    properties: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_row(cls, aid, longitude: float, latitude: float):
        """Build from a NavigationAid row and its rendered coordinates"""
        return cls(
            id=aid.id,
            source_schema=aid.source_schema,
            source_key=aid.source_key,
            source_fidn=aid.source_fidn,
            source_object_type=aid.source_object_type,
            scale_band=aid.scale_band,
            longitude=longitude,
            latitude=latitude,
            structure_type=aid.structure_type,
            mark_category=aid.mark_category,
            lateral_side=aid.lateral_side,
            name=aid.name,
            shape=aid.shape,
            colors=aid.colors,
            color_pattern=aid.color_pattern,
            topmark_shape=aid.topmark_shape,
            topmark_color=aid.topmark_color,
            has_light=aid.has_light,
            light_characteristic=aid.light_characteristic,
            light_color=aid.light_color,
            light_range_nm=aid.light_range_nm,
            light_elevation_m=aid.light_elevation_m,
            properties=aid.properties or {},
        )


class PaginationMetadata(BaseModel):
    """Pagination metadata"""
    total_items: int
    total_pages: int
    current_page: int
    page_size: int
    has_next: bool
    has_previous: bool


class NavigationAidListResponse(BaseModel):
    """Paginated navigation aid response"""
    items: List[NavigationAidResponse]
    pagination: PaginationMetadata
    filters_applied: Dict[str, Any] = Field(default_factory=dict)


# ============================================================================
# Error Response Schema
# ============================================================================

class ErrorResponse(BaseModel):
    """Standard error response"""
    error: str
    detail: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "error": "Sync already in progress"
            }
        }
