
"""
FastAPI application initialization
"""

import asyncio
from fastapi import FastAPI
from api.routes import health, data, pipeline
from api.middleware import RequestContextMiddleware
from core.config import settings
from core.logging import setup_logging
from core.security import mask_credentials
from core.ssh import setup_ssh_key
from ingestion.pipeline import PipelineService
from ingestion.scheduler import PipelineScheduler
import logging

setup_logging()

logger = logging.getLogger(__name__)

app = FastAPI(
    title="navaid-sync",
    description="Syncs Kart navigation-aid repositories into PostGIS and normalizes them",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(RequestContextMiddleware)

# One service per process: its guard is what keeps runs exclusive
app.state.pipeline_service = PipelineService()
scheduler = PipelineScheduler(app.state.pipeline_service)

app.include_router(health.router)
app.include_router(pipeline.router)
app.include_router(data.router)


@app.on_event("startup")
async def startup_event():
    """Application startup event"""
    logger.info("Starting navaid-sync")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Database: {mask_credentials(settings.DATABASE_URL)}")

    await asyncio.to_thread(setup_ssh_key)
    scheduler.start()


@app.on_event("shutdown")
async def shutdown_event():
    """Application shutdown event"""
    logger.info("Shutting down navaid-sync")
    scheduler.stop()


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "navaid-sync",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health",
        "endpoints": {
            "run": "POST /run",
            "navigation_aids": "/navigation-aids"
        }
    }
