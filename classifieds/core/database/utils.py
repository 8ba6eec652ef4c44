"""
Engine, session factory and schema helpers.

``create_engine`` accepts the URL forms hosting providers hand out
(``postgres://``, ``postgresql://``, ``postgresql+psycopg://``) and always
connects through asyncpg; SQLite URLs pass through unchanged for tests and
local runs. ``create_all`` and ``seed_categories`` build a usable database
without Alembic.
"""

from __future__ import annotations

import logging
import re

from sqlalchemy import select
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from .base import Base
from .entities.categories import Category
from .seed import DEFAULT_CATEGORIES

logger = logging.getLogger(__name__)

_POSTGRES_SCHEME = re.compile(r"^postgres(?:ql)?(?:\+[a-z0-9_]+)?://")


def create_engine(db_url: str, **kwargs) -> AsyncEngine:
    """Async engine for ``db_url``; Postgres URLs are moved onto asyncpg.

    Args:
        db_url: Database URL from the settings
        **kwargs: Forwarded to ``create_async_engine``
    """
    url = _POSTGRES_SCHEME.sub("postgresql+asyncpg://", db_url, count=1)
    if url.startswith("postgresql"):
        kwargs.setdefault("pool_pre_ping", True)
    return create_async_engine(url, **kwargs)


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory whose objects stay readable after commit."""
    return async_sessionmaker(engine, expire_on_commit=False)


async def create_all(engine: AsyncEngine) -> None:
    """Create every marketplace table that does not exist yet."""
    from . import entities  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_categories(session: AsyncSession) -> int:
    """Insert the default categories that are not present yet.

    Args:
        session: Async session used for the inserts

    Returns:
        Number of categories inserted
    """
    result = await session.execute(select(Category.slug))
    existing = set(result.scalars().all())
    added = 0
    for row in DEFAULT_CATEGORIES:
        if row["slug"] in existing:
            continue
        session.add(Category(**row))
        added += 1
    if added:
        await session.commit()
        logger.info(f"Seeded {added} categories")
    return added
