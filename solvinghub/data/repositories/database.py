from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel

from solvinghub.config import Config
from solvinghub.errors import ConfigurationException

_async_engine: Optional[AsyncEngine] = None


def get_engine() -> AsyncEngine:
    """
    Returns the process-wide async engine, creating it on first use.
    Connection pooling is left to SQLAlchemy.
    """
    global _async_engine
    if _async_engine is None:
        if not Config.DATABASE_URL:
            raise ConfigurationException(detail="DATABASE_URL is not configured")
        _async_engine = create_async_engine(url=Config.DATABASE_URL, pool_pre_ping=True)
    return _async_engine


async def init_db() -> None:
    """
    Creates the SolvingHub tables if they do not exist.
    """
    # Register table metadata
    import solvinghub.storage.models  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency to get an async session for the SolvingHub database.
    """
    async_session = async_sessionmaker(bind=get_engine(), expire_on_commit=False)
    async with async_session() as session:
        yield session


def require_configuration() -> None:
    """
    Dependency that fails the request before any query runs when the
    database URL or the auth secret is missing.
    """
    missing = [
        name
        for name, value in (
            ("DATABASE_URL", Config.DATABASE_URL),
            ("SUPABASE_JWT_SECRET", Config.SUPABASE_JWT_SECRET),
        )
        if not value
    ]
    if missing:
        raise ConfigurationException(
            detail="Server configuration error",
            details=f"Missing settings: {', '.join(missing)}",
        )
