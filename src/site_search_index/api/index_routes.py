"""
Search Index Routes

Query-time surface of the index document. The ``index`` field is derived
from the page set: it is compiled on demand (or served from cache) and is
never writable.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends

from .dependencies import get_index_node, get_plugin
from .models import SearchIndexResponse
from ..plugin import SearchIndexPlugin
from ..search.models import SearchIndexNode
from ..search.scalar import search_index_scalar

router = APIRouter(prefix="/search-index", tags=["search-index"])


@router.get(
    "",
    response_model=SearchIndexResponse,
    summary="Get the index document with its compiled index",
)
async def get_search_index(
    plugin: Annotated[SearchIndexPlugin, Depends(get_plugin)],
    index_node: Annotated[SearchIndexNode, Depends(get_index_node)],
) -> SearchIndexResponse:
    # Resolver and cache failures reach the global exception handler.
    compiled = await plugin.resolve_index(index_node)

    return SearchIndexResponse(
        id=index_node.id,
        pages=list(index_node.pages),
        content_digest=index_node.content_digest,
        index=search_index_scalar.serialize(compiled),
    )


@router.get("/index", summary="Get the serialized compiled index")
async def get_compiled_index(
    plugin: Annotated[SearchIndexPlugin, Depends(get_plugin)],
    index_node: Annotated[SearchIndexNode, Depends(get_index_node)],
) -> Any:
    compiled = await plugin.resolve_index(index_node)
    return search_index_scalar.serialize(compiled)


@router.put("/index", summary="Not supported: the index is derived")
async def put_compiled_index(value: Annotated[Any, Body()] = None) -> Any:
    return search_index_scalar.parse_value(value)
