"""
Pydantic Schemas
Request/response models for the HTTP API
"""

from ragserver.schemas.embed import EmbedRequest, EmbedResponse
from ragserver.schemas.index import CreateIndexRequest, CreateIndexResponse, IndexMetric
from ragserver.schemas.query import QueryMatch, QueryRequest, QueryResponse

__all__ = [
    "CreateIndexRequest",
    "CreateIndexResponse",
    "EmbedRequest",
    "EmbedResponse",
    "IndexMetric",
    "QueryMatch",
    "QueryRequest",
    "QueryResponse",
]
