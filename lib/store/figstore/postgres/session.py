from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from figstore.config import PostgresSettings
from figstore.postgres.models import Base


_engine: AsyncEngine | None = None


def init_db(settings: PostgresSettings | None = None) -> async_sessionmaker[AsyncSession]:
    global _engine

    if settings is None:
        settings = PostgresSettings()

    _engine = create_async_engine(
        settings.dsn,
        echo=False,
        pool_pre_ping=True,
        pool_size=settings.pool_size,
        max_overflow=settings.max_overflow,
        pool_recycle=3600,
    )
    return async_sessionmaker(_engine, expire_on_commit=False)


async def create_tables(engine: AsyncEngine | None = None) -> None:
    engine = engine or _engine
    if engine is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")
    async with engine.begin() as conn:  # noqa
        await conn.run_sync(Base.metadata.create_all)


async def dispose_db() -> None:
    global _engine
    if _engine is not None:
        await _engine.dispose()
    _engine = None


@asynccontextmanager
async def session_scope(
    factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """unit of work: commits when the block exits cleanly, rolls back otherwise.

    the commit has completed by the time control returns to the caller,
    which is what the write path relies on before invalidating caches.
    """
    async with factory() as session:  # noqa
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
