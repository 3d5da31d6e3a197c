"""
Node Store

In-memory implementation of the host pipeline's node storage primitives.

The store follows the pipeline garbage-collection contract: each process
run starts with ``begin_run()``. Nodes that are neither created nor
touched during the run are considered stale and are removed by
``sweep_stale()``. Plugins call ``touch_node`` at startup to keep the nodes
they own alive across runs.

Design choices
--------------
- Thread-safe access using a re-entrant lock.
- Copy-on-read semantics for list results.
- Nodes are immutable; ``create_node`` replaces any node with the same id.
"""

from __future__ import annotations

import logging
from threading import RLock
from typing import Dict, List, Optional

from .models import Node

logger = logging.getLogger("search.nodes")


class InMemoryNodeStore:
    """
    Mapping of node id to the latest node revision.
    """

    def __init__(self) -> None:
        self._nodes: Dict[str, Node] = {}
        self._seen_in_run: set[str] = set()
        self._run = 0
        self._lock = RLock()

    # ------------------------------------------------------------------
    # Read primitives
    # ------------------------------------------------------------------

    def get_node(self, node_id: str) -> Optional[Node]:
        with self._lock:
            return self._nodes.get(node_id)

    def get_nodes_by_type(self, type_name: str) -> List[Node]:
        with self._lock:
            return [n for n in self._nodes.values() if n.internal.type == type_name]

    def get_nodes(self) -> List[Node]:
        with self._lock:
            return list(self._nodes.values())

    # ------------------------------------------------------------------
    # Write primitives
    # ------------------------------------------------------------------

    def create_node(self, node: Node) -> None:
        """
        Store ``node``, replacing any previous revision with the same id.
        """
        with self._lock:
            self._nodes[node.id] = node
            self._seen_in_run.add(node.id)

    def touch_node(self, node: Node) -> None:
        """
        Mark ``node`` as still valid for the current run.
        """
        with self._lock:
            if node.id in self._nodes:
                self._seen_in_run.add(node.id)

    # ------------------------------------------------------------------
    # Run lifecycle
    # ------------------------------------------------------------------

    def begin_run(self) -> int:
        """
        Start a new run. Returns the run number.
        """
        with self._lock:
            self._run += 1
            self._seen_in_run = set()
            return self._run

    def sweep_stale(self) -> List[str]:
        """
        Delete nodes not created or touched in the current run.

        Returns
        -------
        List[str]
            Ids of removed nodes.
        """
        with self._lock:
            stale = [node_id for node_id in self._nodes if node_id not in self._seen_in_run]
            for node_id in stale:
                del self._nodes[node_id]

        if stale:
            logger.info("Swept %d stale node(s)", len(stale))
        return stale

    def __len__(self) -> int:
        with self._lock:
            return len(self._nodes)
