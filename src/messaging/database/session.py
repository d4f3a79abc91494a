"""
Async engine and session factory for the messaging store.

The engine is built lazily from `Settings` so importing this module never
needs a configured environment (tests bind their own engine).
"""
from functools import lru_cache
from typing import Any, AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
)

from messaging.config import Settings, get_settings


def build_engine(settings: Settings) -> AsyncEngine:
    """
    Create an AsyncEngine honouring the pool and timeout settings.

    SQLite URLs skip pool sizing, which only applies to queue-based pools.
    """
    kwargs: dict[str, Any] = {
        "echo": settings.SQLALCHEMY_ECHO,   # Set to False in production
        "pool_pre_ping": True,              # Enables connection health checks
    }

    url = settings.database_url
    if not url.startswith("sqlite"):
        kwargs["pool_size"] = settings.DB_POOL_SIZE
        kwargs["pool_timeout"] = settings.DB_POOL_TIMEOUT

    if settings.DB_COMMAND_TIMEOUT is not None:
        # asyncpg understands command_timeout, aiosqlite/sqlite3 understands timeout
        key = "timeout" if url.startswith("sqlite") else "command_timeout"
        kwargs["connect_args"] = {key: settings.DB_COMMAND_TIMEOUT}

    return create_async_engine(url, **kwargs)


@lru_cache()
def get_engine() -> AsyncEngine:
    return build_engine(get_settings())


@lru_cache()
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False keeps loaded graphs usable after the caller commits.
    return async_sessionmaker(
        bind=get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency. Yields a session and ensures it's closed after the request.

    Usage:
        async def endpoint(db: AsyncSession = Depends(get_async_session)):
            await db.execute(...)
    """
    async with get_session_maker()() as session:
        yield session
