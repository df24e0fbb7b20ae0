"""Database connection and session management."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from worldclock.config import settings
from worldclock.exceptions import CacheStoreError
from worldclock.models import Base

logger = logging.getLogger(__name__)

# Create async engine
engine = create_async_engine(
    settings.database_url,
    echo=False,  # Set to True for SQL query logging
    future=True,
)

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def init_db(db_engine: AsyncEngine = engine) -> None:
    """
    Create the snapshot tables if they do not exist yet.

    Raises:
        CacheStoreError: If the database cannot be reached
    """
    try:
        async with db_engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Error initialising the snapshot store: {e}", exc_info=True)
        raise CacheStoreError("Could not initialise the snapshot store") from e
