"""Common error response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ResponseMeta(BaseModel):
    request_id: str = Field(alias="requestId")
    timestamp: datetime

    model_config = {
        "populate_by_name": True,
    }


class ResponseError(BaseModel):
    code: str
    message: str
    details: Optional[dict] = None
    hint: Optional[str] = None


class ErrorResponse(BaseModel):
    success: bool = False
    error: ResponseError
    meta: ResponseMeta

    model_config = {
        "populate_by_name": True,
    }
