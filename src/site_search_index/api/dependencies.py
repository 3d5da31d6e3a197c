from fastapi import Request

from ..core.errors import IndexNotFoundError
from ..plugin import SearchIndexPlugin
from ..search.models import SearchIndexNode


def get_plugin(request: Request) -> SearchIndexPlugin:
    return request.app.state.plugin


def get_index_node(request: Request) -> SearchIndexNode:
    index_node = get_plugin(request).current_index()
    if index_node is None:
        raise IndexNotFoundError("No pages have been indexed yet")
    return index_node
