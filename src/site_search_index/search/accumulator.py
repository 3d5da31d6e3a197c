"""
Index Accumulator

Grows the index document one page at a time as eligible content nodes are
observed. The current revision lives in an ``IndexRepository``, a single
slot guarded by a lock so that the read-revise-write sequence of each
append is atomic even when node callbacks overlap.

Revisions are append-only for the lifetime of a run: pages are never
removed, and a page id already present is not appended again.
"""

from __future__ import annotations

import logging
from threading import RLock
from typing import Callable, Mapping, Optional

from ..core.digest import digest, serialize
from ..nodes.models import ItemLookup, Node, NodeInternal
from .models import SEARCH_INDEX_ID, SEARCH_INDEX_TYPE, SOURCE_PARENT, SearchIndexNode

logger = logging.getLogger("search.accumulator")

EligibilityFilter = Callable[[Node, ItemLookup], bool]


# ---------------------------------------------------------------------
# Revision Helpers
# ---------------------------------------------------------------------

def build_revision(pages: list[str], owner: Optional[str] = None) -> SearchIndexNode:
    """
    Build an index document revision for ``pages`` with a fresh digest.
    """
    content = serialize(pages)
    return SearchIndexNode(
        id=SEARCH_INDEX_ID,
        parent=SOURCE_PARENT,
        children=[],
        pages=pages,
        internal=NodeInternal(
            type=SEARCH_INDEX_TYPE,
            content=content,
            content_digest=digest(content),
            owner=owner,
        ),
    )


def append_page(
    index_node: Optional[SearchIndexNode],
    page_id: str,
    owner: Optional[str] = None,
) -> SearchIndexNode:
    """
    Return a new revision with ``page_id`` appended to a copy of ``pages``.
    """
    pages = list(index_node.pages) if index_node is not None else []
    pages.append(page_id)
    return build_revision(pages, owner=owner)


# ---------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------

class IndexRepository:
    """
    Holds the current index document revision.

    Callers never mutate the stored revision; ``append`` swaps in a new one.
    """

    def __init__(self, owner: Optional[str] = None) -> None:
        self._owner = owner
        self._current: Optional[SearchIndexNode] = None
        self._seen: set[str] = set()
        self._lock = RLock()

    def current(self) -> Optional[SearchIndexNode]:
        with self._lock:
            return self._current

    def seed(self, index_node: SearchIndexNode) -> bool:
        """
        Adopt a revision from a previous run if nothing is held yet.

        Returns True if the revision was adopted.
        """
        with self._lock:
            if self._current is not None:
                return False
            self._current = index_node
            self._seen = set(index_node.pages)
            return True

    def append(
        self,
        page_id: str,
        persist: Optional[Callable[[SearchIndexNode], None]] = None,
    ) -> Optional[SearchIndexNode]:
        """
        Append ``page_id`` and return the new revision.

        ``persist`` is called with the revision before the lock is released,
        so stored revisions are written in the order they were created.
        Returns None when the page is already indexed.
        """
        with self._lock:
            if page_id in self._seen:
                return None

            revision = append_page(self._current, page_id, owner=self._owner)
            if persist is not None:
                persist(revision)
            self._current = revision
            self._seen.add(page_id)
            return revision

    def reset(self) -> None:
        with self._lock:
            self._current = None
            self._seen = set()


# ---------------------------------------------------------------------
# Accumulator
# ---------------------------------------------------------------------

class IndexAccumulator:
    """
    Decides node eligibility and appends eligible nodes to the index.

    Parameters
    ----------
    repository : IndexRepository
        Slot holding the current index document.
    resolvers : Mapping
        Field resolver table; only node types present here are indexed.
    predicate : Optional[EligibilityFilter]
        Extra filter ``(node, get_node) -> bool``.
    """

    def __init__(
        self,
        repository: IndexRepository,
        resolvers: Mapping[str, Mapping[str, Callable]],
        predicate: Optional[EligibilityFilter] = None,
    ) -> None:
        self._repository = repository
        self._resolvers = resolvers
        self._predicate = predicate

    def is_eligible(self, node: Node, get_node: ItemLookup) -> bool:
        if node.internal.type not in self._resolvers:
            return False
        if self._predicate is not None and not self._predicate(node, get_node):
            return False
        return True

    def observe(
        self,
        node: Node,
        get_node: ItemLookup,
        persist: Optional[Callable[[SearchIndexNode], None]] = None,
    ) -> Optional[SearchIndexNode]:
        """
        Record ``node`` if it is eligible.

        ``persist`` receives the new revision inside the repository lock.

        Returns
        -------
        Optional[SearchIndexNode]
            The new revision, or None if nothing changed.
        """
        if not self.is_eligible(node, get_node):
            return None

        revision = self._repository.append(node.id, persist=persist)
        if revision is not None:
            logger.debug(
                "Indexed page %s (%d pages, digest %s)",
                node.id,
                len(revision.pages),
                revision.content_digest,
            )
        return revision
