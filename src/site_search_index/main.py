"""
Search Index Service Entry Point

This module defines the FastAPI application instance, registers all
routers, configures exception handling, and provides a test-friendly
application factory.

Startup Order
-------------
1. Configure logging.
2. Validate plugin options (fail fast on missing fields/resolvers).
3. Build the compiled-index cache (in-memory or SQL).
4. Start a node store run and touch index nodes from previous runs.
"""

from __future__ import annotations

import contextlib
import logging
from pathlib import Path
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from .config import Settings, load_plugin_options, settings
from .core.errors import (
    IndexNotFoundError,
    NotSupportedError,
    ReservedNodeError,
    index_not_found_handler,
    not_supported_handler,
    reserved_node_handler,
    unhandled_exception_handler,
)
from .core.logging import configure_logging
from .nodes.store import InMemoryNodeStore
from .plugin import SearchIndexPlugin
from .search.cache import IndexCache, InMemoryIndexCache

from .api import (
    health_routes,
    index_routes,
    node_routes,
)


logger = logging.getLogger("search.app")


# ---------------------------------------------------------------------
# Plugin Construction
# ---------------------------------------------------------------------

async def build_cache(source: Settings) -> IndexCache:
    """
    Create the compiled-index cache selected by ``cache_backend``.
    """
    if source.cache_backend == "sql":
        from .db import AsyncSessionLocal, SqlIndexCache, async_engine, init_models

        db_path = async_engine.url.database
        if db_path and db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

        await init_models(async_engine)
        return SqlIndexCache(AsyncSessionLocal)

    return InMemoryIndexCache()


async def build_plugin(source: Settings) -> SearchIndexPlugin:
    options = load_plugin_options(source)
    cache = await build_cache(source)
    return SearchIndexPlugin(
        options,
        InMemoryNodeStore(),
        cache,
        owner=source.plugin_name,
    )


# ---------------------------------------------------------------------
# Application Factory (Test-Friendly)
# ---------------------------------------------------------------------

def create_app(plugin: Optional[SearchIndexPlugin] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Parameters
    ----------
    plugin : Optional[SearchIndexPlugin]
        Pre-built plugin. When omitted, one is built from ``settings`` at
        startup.

    Returns
    -------
    FastAPI
        Fully configured FastAPI application.
    """

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging(settings.log_level)
        logger.info("Starting site-search-index")

        active = plugin if plugin is not None else await build_plugin(settings)
        active.store.begin_run()
        active.source_nodes()
        app.state.plugin = active

        logger.info(
            "Plugin ready: fields=%s, types=%s",
            list(active.options.fields),
            sorted(active.options.resolvers),
        )
        yield
        logger.info("Shutting down site-search-index")

    app = FastAPI(
        title="site-search-index",
        version="1.0.0",
        lifespan=lifespan,
    )

    # --------------------------------------------------------------
    # Exception Handling
    # --------------------------------------------------------------

    app.add_exception_handler(NotSupportedError, not_supported_handler)
    app.add_exception_handler(IndexNotFoundError, index_not_found_handler)
    app.add_exception_handler(ReservedNodeError, reserved_node_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # --------------------------------------------------------------
    # Router Registration
    # --------------------------------------------------------------

    app.include_router(health_routes.router)
    app.include_router(node_routes.router)
    app.include_router(index_routes.router)

    return app


# ---------------------------------------------------------------------
# Default Application Instance (for Uvicorn)
# ---------------------------------------------------------------------

app = create_app()
