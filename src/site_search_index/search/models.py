"""
Search Index Data Models

The index document is the single node that records which content nodes
belong in the search index. Every mutation produces a new revision whose
``internal.content_digest`` is the digest of its serialized ``pages``.
"""

from __future__ import annotations

from typing import List

from pydantic import Field

from ..nodes.models import Node

SEARCH_INDEX_ID = "SearchIndex < Site"
SEARCH_INDEX_TYPE = "SiteSearchIndex"
SOURCE_PARENT = "___SOURCE___"


class SearchIndexNode(Node):
    """
    A revision of the index document.
    """

    pages: List[str] = Field(
        default_factory=list,
        description="Ids of indexed content nodes, in discovery order.",
    )

    @property
    def content_digest(self) -> str | None:
        return self.internal.content_digest
