"""
Search Index Plugin

Connects the indexing core to the host pipeline lifecycle:

- ``source_nodes``: at startup, keep the index nodes created in earlier
  runs alive and resume from the last known index document.
- ``on_create_node``: for each node the pipeline creates, append it to the
  index document when eligible and persist the new revision.
- ``resolve_index``: compile (or fetch from cache) the serialized index
  for an index document revision.
"""

from __future__ import annotations

import logging
from typing import Optional

from .config import PluginOptions
from .nodes.models import Node
from .nodes.store import InMemoryNodeStore
from .search.accumulator import IndexAccumulator, IndexRepository
from .search.cache import IndexCache
from .search.compiler import (
    BuilderFactory,
    CompiledIndex,
    IndexCompiler,
    default_builder_factory,
)
from .search.models import SEARCH_INDEX_ID, SEARCH_INDEX_TYPE, SearchIndexNode

logger = logging.getLogger("search.plugin")


class SearchIndexPlugin:
    """
    Owns the index document lifecycle for one site.

    Parameters
    ----------
    options : PluginOptions
        Fields, resolver table, languages and filter.
    store : InMemoryNodeStore
        Host node store.
    cache : IndexCache
        Compiled-index cache.
    owner : str
        Owner tag written on created index nodes.
    builder_factory : BuilderFactory
        Creates the lunr builder for the accepted language set.
    """

    def __init__(
        self,
        options: PluginOptions,
        store: InMemoryNodeStore,
        cache: IndexCache,
        owner: str = "site-search-index",
        builder_factory: BuilderFactory = default_builder_factory,
    ) -> None:
        self.options = options
        self.store = store
        self.owner = owner

        self.repository = IndexRepository(owner=owner)
        self.accumulator = IndexAccumulator(
            self.repository,
            options.resolvers,
            predicate=options.filter,
        )
        self.compiler = IndexCompiler(
            cache,
            store.get_node,
            store.get_nodes_by_type,
            store.get_nodes,
            builder_factory=builder_factory,
        )

    # ------------------------------------------------------------------
    # Pipeline hooks
    # ------------------------------------------------------------------

    def source_nodes(self) -> int:
        """
        Touch index nodes owned by this plugin.

        Returns the number of touched nodes.
        """
        existing = [n for n in self.store.get_nodes() if n.internal.owner == self.owner]
        for node in existing:
            self.store.touch_node(node)
            if isinstance(node, SearchIndexNode):
                self.repository.seed(node)

        if existing:
            logger.info("Touched %d existing index node(s)", len(existing))
        return len(existing)

    def on_create_node(self, node: Node) -> Optional[SearchIndexNode]:
        """
        Handle a node created by the pipeline.

        Returns the new index document revision, or None if the node was
        skipped.
        """
        # Our own revisions come back through the pipeline too.
        if self.is_index_node(node):
            return None

        return self.accumulator.observe(
            node,
            self.store.get_node,
            persist=self.store.create_node,
        )

    @staticmethod
    def is_index_node(node: Node) -> bool:
        return node.id == SEARCH_INDEX_ID or node.internal.type == SEARCH_INDEX_TYPE

    def current_index(self) -> Optional[SearchIndexNode]:
        return self.repository.current()

    async def resolve_index(self, index_node: SearchIndexNode) -> CompiledIndex:
        return await self.compiler.compile(
            index_node,
            self.options.fields,
            self.options.resolvers,
            self.options.languages,
        )
