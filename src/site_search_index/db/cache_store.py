"""
SQL Index Cache

Compiled-index cache persisted through SQLAlchemy, so compiled indexes
survive process restarts. Implements the same async ``get``/``set``
interface as ``InMemoryIndexCache``.

I/O errors are not caught: a failing read or write aborts the query.
"""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from .models import CompiledIndexEntry


class SqlIndexCache:
    """
    Database-backed compiled-index cache.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """
        Parameters
        ----------
        session_factory : async_sessionmaker[AsyncSession]
            Factory producing a fresh session per operation.
        """
        self._session_factory = session_factory

    async def get(self, key: str) -> Optional[Any]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(CompiledIndexEntry.value).where(CompiledIndexEntry.key == key)
            )
            return result.scalar_one_or_none()

    async def set(self, key: str, value: Any) -> None:
        async with self._session_factory() as session:
            await session.merge(CompiledIndexEntry(key=key, value=value))
            await session.commit()
