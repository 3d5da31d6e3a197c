"""
API Models

Pydantic models for request/response validation on the node ingestion
and search index endpoints.
"""

from __future__ import annotations

from typing import Any, List, Literal

from pydantic import BaseModel, ConfigDict, Field


class NodeIngestResult(BaseModel):
    """
    Outcome of reporting a created node.
    """
    status: Literal["indexed", "skipped"]
    pages: int = Field(..., ge=0)

    model_config = ConfigDict(extra="forbid")


class SearchIndexResponse(BaseModel):
    """
    Public view of the index document, including its compiled index.
    """
    id: str
    pages: List[str] = Field(default_factory=list)
    content_digest: str = Field(..., alias="contentDigest")
    index: Any = Field(..., description="Serialized lunr search index (opaque).")

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    pages: int = Field(default=0, ge=0)
