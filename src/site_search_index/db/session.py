"""
Database Session Management

Provides the async SQLAlchemy engine and session factory backing the
persistent compiled-index cache.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ..config import settings
from .models import Base


def make_engine(url: str, **kwargs: Any) -> AsyncEngine:
    return create_async_engine(
        url,
        echo=False,  # Set True for SQL debugging
        pool_pre_ping=True,
        **kwargs,
    )


def make_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def init_models(engine: AsyncEngine) -> None:
    """
    Create missing tables.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async_engine = make_engine(settings.database_url)
AsyncSessionLocal = make_session_factory(async_engine)
