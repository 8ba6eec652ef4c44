from typing import AsyncGenerator

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel.pool import StaticPool

from classifieds.core.database.repositories import RepoBundle, build_repos
from classifieds.core.database.utils import create_all, create_sessionmaker, seed_categories

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory database with every table and the default categories."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)
    async with create_sessionmaker(engine)() as session:
        await seed_categories(session)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(test_engine) -> async_sessionmaker[AsyncSession]:
    return create_sessionmaker(test_engine)


@pytest_asyncio.fixture(name="session")
async def session_fixture(session_maker) -> AsyncGenerator[AsyncSession, None]:
    """Create a new session for each test."""
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def repos(session: AsyncSession) -> RepoBundle:
    return build_repos(session)
