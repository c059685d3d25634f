import asyncio
import logging
import sys
import os

# Add current directory to path to allow imports from core, models, etc.
sys.path.append(os.getcwd())

from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine
from core.config import settings
from core.logging import setup_logging
from core.security import mask_credentials
from models.base import Base
# Import all models to ensure they are registered
from models.navigation_aid import NavigationAid  # noqa: F401

logger = logging.getLogger(__name__)


async def init_database():
    logger.info(f"Connecting to {mask_credentials(settings.DATABASE_URL)}")
    engine = create_async_engine(settings.DATABASE_URL, echo=False)

    async with engine.begin() as conn:
        await conn.execute(text("CREATE EXTENSION IF NOT EXISTS postgis"))
        logger.info("Creating tables...")
        await conn.run_sync(Base.metadata.create_all)
        logger.info("Tables created successfully.")

    await engine.dispose()


if __name__ == "__main__":
    setup_logging()
    asyncio.run(init_database())
