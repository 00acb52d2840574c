"""
Pytest configuration and fixtures.
"""
import os

# Must be set before sprout.config is imported anywhere
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ.setdefault("TELEGRAM_ADMIN_IDS", "1")

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from sprout.database.models import Base
from sprout.database.session import dumps_json
from sprout.database.options import update_option
from sprout.hooks import HookRegistry
from sprout.modules.errors import ErrorCache, OPTION_NAME


@pytest_asyncio.fixture
async def session_factory():
    """Session factory bound to a fresh in-memory database."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        json_serializer=dumps_json,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def hooks():
    return HookRegistry()


@pytest_asyncio.fixture
async def seed_errors(db):
    """Store a previous request's error history."""
    records = [
        {"hash": "db_timeout1700000000", "code": "db_timeout", "message": "Timed out",
         "data": None, "time": 1700000000},
        {"hash": "5001700000100", "code": 500, "message": "Server error",
         "data": {"path": "/"}, "time": 1700000100},
    ]
    await update_option(db, OPTION_NAME, records)
    return records


@pytest_asyncio.fixture
async def error_cache(db, hooks):
    cache = ErrorCache(hooks, db)
    await cache.load_module()
    return cache


@pytest_asyncio.fixture
async def seeded_cache(db, hooks, seed_errors):
    cache = ErrorCache(hooks, db)
    await cache.load_module()
    return cache
