"""Async engine and session factory construction."""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from ledger.config import settings
from ledger.models.db import Base


def build_engine(database_url: str | None = None, **kwargs) -> AsyncEngine:
    kwargs.setdefault("isolation_level", settings.isolation_level)
    return create_async_engine(database_url or settings.database_url, echo=settings.debug, **kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


async def create_schema(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
