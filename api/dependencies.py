"""
FastAPI dependencies
"""

from typing import AsyncGenerator
from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession
from core.database import async_session_maker
from ingestion.pipeline import PipelineService


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_maker() as session:
        yield session


def get_pipeline_service(request: Request) -> PipelineService:
    """The process-wide service (and guard) created at app import."""
    return request.app.state.pipeline_service
