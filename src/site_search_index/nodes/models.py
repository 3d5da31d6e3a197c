"""
Node Data Models

Content nodes are the unit the host pipeline discovers and stores. Each
node carries pipeline bookkeeping under ``internal`` plus arbitrary content
attributes (title, body, frontmatter, ...), which are kept as extra fields
so that field resolvers can read them as plain attributes.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class NodeInternal(BaseModel):
    """
    Pipeline bookkeeping for a node.
    """

    type: str = Field(..., min_length=1, description="Declared node type name.")
    content: Optional[str] = None
    content_digest: Optional[str] = Field(default=None, alias="contentDigest")
    owner: Optional[str] = Field(
        default=None,
        description="Name of the plugin that created the node.",
    )

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="forbid",
    )


class Node(BaseModel):
    """
    A content node as exposed by the pipeline's node store.
    """

    id: str = Field(..., min_length=1)
    parent: Optional[str] = None
    children: List[str] = Field(default_factory=list)
    internal: NodeInternal
    date: Optional[Any] = None

    model_config = ConfigDict(
        frozen=True,
        extra="allow",  # Content attributes read by field resolvers
    )

    @property
    def type(self) -> str:
        return self.internal.type

    def get(self, name: str, default: Any = None) -> Any:
        """
        Return a content attribute, or ``default`` if the node lacks it.
        """
        return getattr(self, name, default)


# Lookup primitives handed to filters and field resolvers.
ItemLookup = Callable[[str], Optional[Node]]
TypeLookup = Callable[[str], List[Node]]
AllItems = Callable[[], List[Node]]
