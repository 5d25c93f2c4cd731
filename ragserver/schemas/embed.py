"""
Embed Schemas
Pydantic models for the /embed request and acknowledgment
"""

from typing import Any, Literal

from pydantic import Field

from ragserver.schemas.base import BaseSchema


# Optional request fields copied verbatim into the stored record's metadata
METADATA_FIELDS: tuple[str, ...] = (
    "topic",
    "description",
    "source",
    "author",
    "page",
    "date",
)


class EmbedRequest(BaseSchema):
    """
    Text chunk to embed and store

    Used by: POST /embed
    """

    query_id: str = Field(min_length=1, description="Caller-supplied record identifier")
    index_name: str = Field(min_length=1, description="Target index")
    content: str = Field(min_length=1, description="Text to embed")
    topic: str | None = None
    description: str | None = None
    source: str | None = None
    author: str | None = None
    page: int | None = Field(default=None, ge=0)
    date: str | None = Field(default=None, description="Publication date, free-form")

    def record_metadata(self) -> dict[str, Any]:
        """Metadata bag for the stored record; unset optional fields are omitted."""
        metadata: dict[str, Any] = {"query_id": self.query_id}
        for name in METADATA_FIELDS:
            value = getattr(self, name)
            if value is not None:
                metadata[name] = value
        return metadata


class EmbedResponse(BaseSchema):
    query_id: str
    status: Literal["success"] = "success"
    records: int = Field(ge=1, description="Number of records upserted")
