"""
Process-wide engine and session factory.

Built from ``DATABASE_URL`` at import time. Routes receive a session per
request through ``get_session``; tests override that dependency.
"""

from __future__ import annotations

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from classifieds.core.logging_config import get_logger
from classifieds.server.core.config import settings

from .utils import create_all, create_engine, create_sessionmaker, seed_categories

logger = get_logger(__name__)

engine = create_engine(settings.database_url)
async_session_maker = create_sessionmaker(engine)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session, closed when the response is sent."""
    async with async_session_maker() as session:
        yield session


async def init_db() -> None:
    """
    Prepare the database on startup.

    Alembic owns the schema, so this does nothing by default. With
    ``CLASSIFIEDS_AUTO_CREATE_TABLES`` on (local development) the tables are
    created from the ORM metadata and the default categories are seeded.
    """
    if not settings.auto_create_tables:
        logger.debug("Skipping table creation; schema is managed by Alembic")
        return

    logger.info("Creating database tables from ORM metadata")
    await create_all(engine)
    async with async_session_maker() as session:
        await seed_categories(session)
