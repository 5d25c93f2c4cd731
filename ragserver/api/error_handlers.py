"""Common exception handlers for API responses."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from ragserver.core.exceptions import (
    ConfigurationError,
    DimensionMismatchError,
    EmbeddingServiceError,
    EmbeddingTimeoutError,
    IndexAlreadyExistsError,
    IndexNotFoundError,
    RAGServerError,
    ValidationError,
    VectorStoreError,
    VectorStoreTimeoutError,
)
from ragserver.core.logging import get_logger
from ragserver.api.response_utils import build_meta
from ragserver.schemas.response import ErrorResponse, ResponseError

logger = get_logger(__name__)


# Most specific classes first: the first isinstance match wins
EXCEPTION_RESPONSE_MAP: list[tuple[type[Exception], int, str | None]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST, "ValidationError"),
    (IndexNotFoundError, status.HTTP_404_NOT_FOUND, "IndexNotFoundError"),
    (IndexAlreadyExistsError, status.HTTP_409_CONFLICT, "IndexAlreadyExistsError"),
    (EmbeddingTimeoutError, status.HTTP_504_GATEWAY_TIMEOUT, "EmbeddingTimeoutError"),
    (VectorStoreTimeoutError, status.HTTP_504_GATEWAY_TIMEOUT, "VectorStoreTimeoutError"),
    (EmbeddingServiceError, status.HTTP_502_BAD_GATEWAY, "EmbeddingServiceError"),
    (DimensionMismatchError, status.HTTP_503_SERVICE_UNAVAILABLE, "DimensionMismatchError"),
    # code=None keeps the exception's own code (e.g. VectorStoreAuthError)
    (VectorStoreError, status.HTTP_503_SERVICE_UNAVAILABLE, None),
    (ConfigurationError, status.HTTP_500_INTERNAL_SERVER_ERROR, "ConfigurationError"),
]
DEFAULT_ERROR_CODE = "INTERNAL.UNEXPECTED"


def resolve_status(exc: Exception) -> tuple[int, str]:
    """Map an exception to (HTTP status, error code)."""
    for exc_type, status_code, error_code in EXCEPTION_RESPONSE_MAP:
        if isinstance(exc, exc_type):
            return status_code, error_code or getattr(exc, "code", exc_type.__name__)
    return status.HTTP_500_INTERNAL_SERVER_ERROR, DEFAULT_ERROR_CODE


def register_exception_handlers(app: FastAPI) -> None:
    """Register handlers that render every failure as an ErrorResponse."""

    app.add_exception_handler(RAGServerError, _rag_exception_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_error_handler)
    app.add_exception_handler(HTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)


def _error_response(
    request: Request,
    *,
    status_code: int,
    code: str,
    message: str,
    details: Any | None = None,
    hint: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error=ResponseError(code=code, message=message, details=details, hint=hint),
        meta=build_meta(request),
    )
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body, by_alias=True),
        headers=headers,
    )


def _compress_detail(detail: Any) -> tuple[str, Any | None]:
    if isinstance(detail, dict):
        message = detail.get("message", str(detail))
        return message, detail.get("details") or detail

    return str(detail), None


def _format_validation_message(errors: list[dict[str, Any]]) -> str:
    if not errors:
        return "Validation error"

    parts: list[str] = []
    for error in errors:
        loc = error.get("loc", [])
        msg = error.get("msg", "Validation error")
        loc_path = ".".join(str(item) for item in loc) if loc else None
        parts.append(f"{loc_path}: {msg}" if loc_path else msg)

    return "; ".join(parts)


async def _rag_exception_handler(request: Request, exc: RAGServerError) -> JSONResponse:
    status_code, error_code = resolve_status(exc)
    log = logger.error if status_code >= 500 else logger.warning
    log("request_failed", status_code=status_code, error_code=error_code, error=exc.message)

    return _error_response(
        request,
        status_code=status_code,
        code=error_code,
        message=exc.message,
        details=exc.details,
        hint=getattr(exc, "hint", None),
    )


async def _request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors() or []
    message = _format_validation_message(errors)
    logger.warning("request_validation_failed", error=message)

    return _error_response(
        request,
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        code="ValidationError",
        message=message,
        details={"errors": jsonable_encoder(errors)},
    )


async def _http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    message, details = _compress_detail(exc.detail)
    code = getattr(exc, "code", None) or f"HTTP.{exc.status_code}"

    return _error_response(
        request,
        status_code=exc.status_code,
        code=code,
        message=message,
        details=details,
        headers=getattr(exc, "headers", None),
    )


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_exception", error=str(exc))

    return _error_response(
        request,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        code=DEFAULT_ERROR_CODE,
        message="Unexpected server error.",
    )
