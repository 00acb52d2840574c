"""Database session management."""
import json
from typing import Any, Dict

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker
)

from sprout.config import config
from sprout.database.models import Base


def dumps_json(value: Any) -> str:
    """Serialise JSON columns; values json can't encode are stored as str()."""
    return json.dumps(value, default=str)


_engine_options: Dict[str, Any] = {
    "echo": False,  # Set to True for SQL query logging
    "pool_pre_ping": True,
    "json_serializer": dumps_json,
}
# SQLite pools do not take sizing arguments
if not config.DATABASE_URL.startswith("sqlite"):
    _engine_options.update(pool_size=10, max_overflow=20)

# Create async engine
engine = create_async_engine(config.DATABASE_URL, **_engine_options)

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def init_db() -> None:
    """Initialize database (create all tables).

    Note: Use Alembic migrations for schema changes.
    This function is kept for local runs and testing.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
