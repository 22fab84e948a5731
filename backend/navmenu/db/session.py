"""Async Session Factory - DB sessions outside FastAPI (scripts, test fixtures).

Invariants:
    - expire_on_commit=False, same as DatabaseSessionManager
    - create_schema() builds tables from ORM metadata; production uses Alembic
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)

from navmenu.db.base import Base


def create_session_factory(
    engine_or_url: AsyncEngine | str,
) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory for an engine or database URL."""
    engine = (
        create_async_engine(engine_or_url, echo=False)
        if isinstance(engine_or_url, str) else engine_or_url
    )
    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create every table registered on Base.metadata."""
    import navmenu.models  # noqa: F401  (registers tables)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_schema(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
