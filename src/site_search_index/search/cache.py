"""
Compiled-Index Cache

Async key-value interface the compiler reads and writes, and an in-memory
implementation. A SQL-backed implementation lives in ``db.cache_store``.

Keys are scoped to the index document revision (id and content digest),
so a changed page set always misses.
"""

from __future__ import annotations

from threading import RLock
from typing import Any, Dict, Optional, Protocol

from .models import SearchIndexNode


def cache_key(index_node: SearchIndexNode) -> str:
    """
    Cache key for the compiled index of ``index_node``'s revision.
    """
    return f"{index_node.id}:{index_node.content_digest}:index"


class IndexCache(Protocol):
    async def get(self, key: str) -> Optional[Any]: ...

    async def set(self, key: str, value: Any) -> None: ...


class InMemoryIndexCache:
    """
    Process-local cache. Values are stored and returned as-is.
    """

    def __init__(self) -> None:
        self._store: Dict[str, Any] = {}
        self._lock = RLock()

    async def get(self, key: str) -> Optional[Any]:
        with self._lock:
            return self._store.get(key)

    async def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._store[key] = value

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
