"""
Navigation aid retrieval endpoint with pagination and filtering
"""

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, and_
from api.dependencies import get_db
from schemas.api import NavigationAidListResponse, NavigationAidResponse, PaginationMetadata
from models.navigation_aid import NavigationAid
from typing import Optional
import time
import math
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Data"])


@router.get("/navigation-aids", response_model=NavigationAidListResponse)
async def list_navigation_aids(
    request: Request,
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(50, ge=1, le=1000, description="Items per page"),
    source_schema: Optional[str] = Query(None, description="Filter by source schema"),
    structure_type: Optional[str] = Query(None, description="Filter by structure type (buoy, beacon)"),
    scale_band: Optional[str] = Query(None, description="Filter by scale band"),
    db: AsyncSession = Depends(get_db)
):
    """
    Retrieve paginated navigation aids from the unified table.

    Geometry is returned as longitude/latitude (WGS84).
    """
    start_time = time.time()
    request_id = getattr(request.state, "request_id", "-")

    logger.info(
        f"[{request_id}] GET /navigation-aids - page={page}, page_size={page_size}, "
        f"filters: source_schema={source_schema}, structure_type={structure_type}, scale_band={scale_band}"
    )

    filters = []
    if source_schema:
        filters.append(NavigationAid.source_schema == source_schema)
    if structure_type:
        filters.append(NavigationAid.structure_type == structure_type)
    if scale_band:
        filters.append(NavigationAid.scale_band == scale_band)

    count_query = select(func.count()).select_from(NavigationAid)
    if filters:
        count_query = count_query.where(and_(*filters))

    count_result = await db.execute(count_query)
    total_items = count_result.scalar() or 0

    total_pages = math.ceil(total_items / page_size) if total_items > 0 else 0
    offset = (page - 1) * page_size

    query = select(
        NavigationAid,
        func.ST_X(NavigationAid.geom).label("longitude"),
        func.ST_Y(NavigationAid.geom).label("latitude"),
    )
    if filters:
        query = query.where(and_(*filters))
    query = query.order_by(NavigationAid.source_key).offset(offset).limit(page_size)

    result = await db.execute(query)
    items = [
        NavigationAidResponse.from_row(aid, longitude, latitude)
        for aid, longitude, latitude in result.all()
    ]

    api_latency_ms = (time.time() - start_time) * 1000
    logger.info(f"[{request_id}] Returned {len(items)} navigation aids ({api_latency_ms:.2f}ms)")

    return NavigationAidListResponse(
        items=items,
        pagination=PaginationMetadata(
            current_page=page,
            page_size=page_size,
            total_items=total_items,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_previous=page > 1
        ),
        filters_applied={k: v for k, v in {
            "source_schema": source_schema,
            "structure_type": structure_type,
            "scale_band": scale_band,
        }.items() if v is not None}
    )
