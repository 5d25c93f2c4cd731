"""Middleware binding a request id into logs and response headers."""

from __future__ import annotations

import time
from typing import Any
from uuid import uuid4

from fastapi import Request
from fastapi.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware

from ragserver.api.response_utils import REQUEST_ID_HEADER
from ragserver.core.logging import bind_request_context, clear_request_context, get_logger

logger = get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tag every request with an id and log its outcome."""

    async def dispatch(self, request: Request, call_next: Any) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id
        bind_request_context(request_id=request_id, method=request.method, path=request.url.path)

        start = time.perf_counter()
        try:
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.info(
                "request_completed",
                status_code=response.status_code,
                latency_ms=round(elapsed_ms, 2),
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_request_context()
