"""
Query Schemas
Pydantic models for the /query request and ranked results
"""

from typing import Any

from pydantic import Field

from ragserver.schemas.base import BaseSchema


class QueryRequest(BaseSchema):
    """
    Similarity search over one index

    top_k falls back to the configured default when omitted;
    a missing score_threshold disables score filtering.
    """

    index_name: str = Field(min_length=1)
    query_text: str = Field(min_length=1)
    top_k: int | None = Field(default=None, gt=0, description="Maximum number of results")
    score_threshold: float | None = Field(
        default=None,
        description="Minimum similarity score a result must reach",
    )


class QueryMatch(BaseSchema):
    id: str
    score: float
    metadata: dict[str, Any] = Field(default_factory=dict)


class QueryResponse(BaseSchema):
    index_name: str
    results: list[QueryMatch] = Field(default_factory=list)
    count: int = Field(ge=0)
