"""
Health check endpoint with database and run status
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import text
from api.dependencies import get_db, get_pipeline_service
from ingestion.pipeline import PipelineService
from schemas.api import HealthResponse
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    db: AsyncSession = Depends(get_db),
    service: PipelineService = Depends(get_pipeline_service)
):
    """
    Health check endpoint.

    Returns:
    - Whether a pipeline run is currently in flight
    - Database connectivity status
    """
    db_connected = False

    try:
        await db.execute(text("SELECT 1"))
        db_connected = True
    except Exception as e:
        logger.error(f"Database connection failed: {str(e)}")

    return HealthResponse(
        status="ok",
        running=service.is_running,
        database_connected=db_connected,
    )
