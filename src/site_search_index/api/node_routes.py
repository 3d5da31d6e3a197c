"""
Node Routes

Endpoint through which the host content pipeline reports each node it
creates. Eligible nodes are appended to the index document.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from .dependencies import get_plugin
from .models import NodeIngestResult
from ..core.errors import ReservedNodeError
from ..nodes.models import Node
from ..plugin import SearchIndexPlugin

router = APIRouter(prefix="/nodes", tags=["nodes"])


@router.post(
    "",
    response_model=NodeIngestResult,
    summary="Report a node created by the content pipeline",
    status_code=status.HTTP_200_OK,
)
def create_node(
    node: Node,
    plugin: Annotated[SearchIndexPlugin, Depends(get_plugin)],
) -> NodeIngestResult:
    """
    Store the node and index it when eligible.

    Ineligible nodes (unregistered type, or rejected by the configured
    filter) are stored but leave the index document unchanged. Index
    document nodes are rejected: only the accumulator writes those.
    """
    if plugin.is_index_node(node):
        raise ReservedNodeError(f"Node {node.id!r} is reserved for the search index")

    plugin.store.create_node(node)
    revision = plugin.on_create_node(node)

    current = plugin.current_index()
    return NodeIngestResult(
        status="indexed" if revision is not None else "skipped",
        pages=len(current.pages) if current else 0,
    )
