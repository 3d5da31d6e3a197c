from typing import Annotated

from fastapi import APIRouter, Depends

from .dependencies import get_plugin
from .models import HealthResponse
from ..plugin import SearchIndexPlugin

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health(plugin: Annotated[SearchIndexPlugin, Depends(get_plugin)]) -> HealthResponse:
    index_node = plugin.current_index()
    return HealthResponse(pages=len(index_node.pages) if index_node else 0)
