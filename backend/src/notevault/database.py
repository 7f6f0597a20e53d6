# Database connection setup
from typing import Any, AsyncIterator, Dict

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from .config import Settings, get_settings
from .core.models.base import BaseModel


def engine_options(settings: Settings) -> Dict[str, Any]:
    """Engine kwargs; pool tuning only applies to server databases."""
    options: Dict[str, Any] = {"echo": settings.database_echo}
    if not settings.database_url.startswith("sqlite"):
        options.update(pool_pre_ping=True, pool_size=10, max_overflow=20)
    return options


settings = get_settings()

engine = create_async_engine(settings.database_url, **engine_options(settings))

# objects stay readable after commit, handlers serialize them afterwards
AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """One session per request, closed when the request ends."""
    async with AsyncSessionLocal() as session:
        yield session


async def create_tables() -> None:
    """Create any missing tables (Alembic owns real schema changes)."""
    # models must be imported so their tables are registered
    from .core import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)
