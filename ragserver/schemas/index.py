"""
Index Schemas
Pydantic models for index creation
"""

from enum import Enum
from typing import Literal

from pydantic import Field

from ragserver.schemas.base import BaseSchema


class IndexMetric(str, Enum):
    COSINE = "cosine"
    EUCLIDEAN = "euclidean"
    DOTPRODUCT = "dotproduct"


class CreateIndexRequest(BaseSchema):
    # Pinecone accepts lowercase alphanumerics and "-" only
    index_name: str = Field(min_length=1, max_length=45, pattern=r"^[a-z0-9-]+$")
    dimension: int = Field(gt=0, le=20000)
    metric: IndexMetric = IndexMetric.COSINE


class CreateIndexResponse(BaseSchema):
    index_name: str
    dimension: int
    metric: IndexMetric
    status: Literal["created"] = "created"
