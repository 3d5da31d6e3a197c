"""
Database Package

Provides SQLAlchemy async session management and the persistent
compiled-index cache.
"""

from .session import (
    AsyncSessionLocal,
    async_engine,
    init_models,
    make_engine,
    make_session_factory,
)
from .models import Base, CompiledIndexEntry
from .cache_store import SqlIndexCache

__all__ = [
    "AsyncSessionLocal",
    "async_engine",
    "init_models",
    "make_engine",
    "make_session_factory",
    "Base",
    "CompiledIndexEntry",
    "SqlIndexCache",
]
