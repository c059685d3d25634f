"""
Pipeline trigger endpoint
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from api.dependencies import get_pipeline_service
from core.exceptions import ConfigError, PipelineAlreadyRunningError
from ingestion.pipeline import PipelineService
from schemas.api import ErrorResponse
from schemas.pipeline import PipelineRunResult
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Pipeline"])


@router.post(
    "/run",
    response_model=PipelineRunResult,
    responses={
        409: {"model": ErrorResponse, "description": "A run is already in progress"},
        500: {"description": "At least one dataset or schema failed, or the catalogue is invalid"},
    },
)
async def run_pipeline(
    request: Request,
    service: PipelineService = Depends(get_pipeline_service)
):
    """
    Sync every catalogued repository, then transform what synced.

    Returns 200 when every item succeeded, 500 when any failed and 409
    without doing anything when a run is already in flight.
    """
    request_id = getattr(request.state, "request_id", "-")
    logger.info(f"[{request_id}] Received /run request")

    try:
        result = await service.run()
    except PipelineAlreadyRunningError as e:
        logger.warning(f"[{request_id}] Rejected /run: {e.message}")
        return JSONResponse(status_code=409, content={"error": e.message})
    except ConfigError as e:
        logger.error(f"[{request_id}] Pipeline aborted: {e.message}")
        return JSONResponse(status_code=500, content={"error": e.message})

    return JSONResponse(
        status_code=200 if result.success else 500,
        content=result.model_dump(mode="json"),
    )
