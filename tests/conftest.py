"""Pytest configuration and fixtures.

This module provides common fixtures used across all tests.
"""

from collections.abc import AsyncGenerator

import pytest_asyncio
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from sequencer.core.database import Base
from sequencer.core.logging import setup_logging

# Setup logging for tests
setup_logging()


@pytest_asyncio.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create an in-memory SQLite engine with all tables.

    A single shared connection keeps the in-memory database alive for the
    whole test.

    Yields:
        Async engine
    """
    import sequencer.models  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to the test engine.

    Returns:
        Session factory
    """
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
