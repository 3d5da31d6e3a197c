"""
Errors and Global Error Handling

Service exception hierarchy and the FastAPI handlers mapping it to HTTP
responses. Every error body has the shape ``{"error": ..., "detail": ...}``;
unexpected failures are logged with their traceback and never echoed.
"""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger("search.errors")


# ---------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------

class SearchIndexError(RuntimeError):
    """Base error for search index failures."""


class ConfigurationError(SearchIndexError):
    """Raised when plugin options are missing or invalid."""


class NotSupportedError(SearchIndexError):
    """Raised on any attempt to write the derived index field."""

    def __init__(self, message: str = "Not supported") -> None:
        super().__init__(message)


class IndexNotFoundError(SearchIndexError):
    """Raised when no index document has been created yet."""


class ReservedNodeError(SearchIndexError):
    """Raised when a client reports a node that only the index may create."""


# ---------------------------------------------------------------------
# Public Exception Handlers
# ---------------------------------------------------------------------

async def not_supported_handler(
    request: Request,
    exc: NotSupportedError,
) -> JSONResponse:
    """
    Reject writes to the read-only index field.
    """
    return JSONResponse(
        status_code=405,
        content={"error": "not_supported", "detail": str(exc)},
    )


async def index_not_found_handler(
    request: Request,
    exc: IndexNotFoundError,
) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={"error": "index_not_found", "detail": str(exc)},
    )


async def reserved_node_handler(
    request: Request,
    exc: ReservedNodeError,
) -> JSONResponse:
    return JSONResponse(
        status_code=409,
        content={"error": "reserved_node", "detail": str(exc)},
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """
    Log the traceback of an uncaught exception and return a bare 500.

    Resolver and cache failures from a compile end up here.
    """
    logger.exception(
        "Unhandled exception during request: %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )

    return JSONResponse(
        status_code=500,
        content={"error": "internal_server_error", "detail": "Internal server error"},
    )
