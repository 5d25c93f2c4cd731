"""Shared helpers for building API response metadata."""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from fastapi import Request

from ragserver.schemas.response import ResponseMeta

REQUEST_ID_HEADER = "X-Request-ID"


def get_request_id(request: Request) -> str:
    """Request id set by the middleware, the caller's header, or a new one."""
    request_id = getattr(request.state, "request_id", None)
    return request_id or request.headers.get(REQUEST_ID_HEADER) or str(uuid4())


def build_meta(request: Request) -> ResponseMeta:
    return ResponseMeta(requestId=get_request_id(request), timestamp=datetime.now(timezone.utc))
