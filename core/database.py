"""
Database session management with SQLAlchemy async
"""

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool
from sqlalchemy.schema import DropSchema
from core.config import settings
from core.security import mask_credentials
import logging

logger = logging.getLogger(__name__)

engine = create_async_engine(
    settings.DATABASE_URL,
    echo=False,
    poolclass=NullPool,
    future=True
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False
)


async def get_session() -> AsyncSession:
    """Get database session"""
    async with async_session_maker() as session:
        yield session


async def drop_schema(schema_name: str) -> None:
    """Drop a schema and everything in it, if it exists."""
    logger.debug(f"Dropping schema {schema_name} on {mask_credentials(settings.DATABASE_URL)}")
    async with engine.begin() as conn:
        await conn.execute(DropSchema(schema_name, cascade=True, if_exists=True))
