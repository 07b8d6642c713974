"""
Database session configuration.

This module handles database engine creation and session management
using SQLAlchemy with async support (aiosqlite by default, asyncpg for PostgreSQL).
"""

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from parcel_tracker.app.core.config import settings


def _engine_options() -> dict:
    options = {"echo": settings.db_echo}
    if not settings.is_sqlite:
        options["pool_size"] = settings.db_pool_size
        options["max_overflow"] = settings.db_max_overflow
    return options


# Create async engine
engine = create_async_engine(settings.database_url, **_engine_options())

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

# Create declarative base for models
Base = declarative_base()


async def init_db() -> None:
    """
    Create the parcel table if it does not exist.

    Schema management lives here, outside the store.
    """
    # Import models so they register with Base
    import parcel_tracker.app.models.parcel  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db():
    """
    FastAPI dependency for database sessions.

    Yields an async database session and ensures it's properly closed.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()
