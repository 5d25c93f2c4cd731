"""
Service Layer Base Classes

Services compose the embedding client and the vector store and never see
FastAPI Request/Response objects; routers translate HTTP to schemas.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, TypeVar

from ragserver.core.exceptions import RAGServerError
from ragserver.core.logging import get_logger
from ragserver.embedding.protocol import EmbeddingClientProtocol
from ragserver.schemas.base import BaseSchema
from ragserver.vectorstore.protocol import VectorStoreProtocol


T = TypeVar("T")


class BaseService:
    """
    Shared logging/error helpers for services.
    """

    def __init__(
        self,
        *,
        embedding_client: EmbeddingClientProtocol,
        vectorstore: VectorStoreProtocol,
    ) -> None:
        self.embedding_client = embedding_client
        self.vectorstore = vectorstore
        self.logger = get_logger(self.__class__.__name__)

    def _log_start(self, operation: str, payload: BaseSchema | None = None) -> None:
        serialized = payload.model_dump(exclude_none=True, exclude={"content"}) if payload else None
        self.logger.info("service_operation_start", operation=operation, payload=serialized)

    def _log_success(self, operation: str, metadata: dict[str, Any] | None = None) -> None:
        meta = metadata or {}
        self.logger.info("service_operation_success", operation=operation, **meta)

    def _log_failure(self, operation: str, error: Exception) -> None:
        self.logger.error(
            "service_operation_failed",
            operation=operation,
            error=str(error),
            error_code=getattr(error, "code", type(error).__name__),
        )

    async def _execute_with_handling(
        self,
        operation: str,
        action: Callable[[], Awaitable[T]],
        *,
        payload: BaseSchema | None = None,
        error_mapper: Callable[[Exception], RAGServerError] | None = None,
    ) -> T:
        """
        Run `action` with start/success/failure logging.

        RAGServerError subclasses propagate unchanged; anything else is
        passed through `error_mapper` when one is given.
        """

        self._log_start(operation, payload)
        try:
            result = await action()
        except RAGServerError as exc:
            self._log_failure(operation, exc)
            raise
        except Exception as exc:  # noqa: BLE001 - converted at the service boundary
            self._log_failure(operation, exc)
            if error_mapper:
                raise error_mapper(exc) from exc
            raise

        self._log_success(operation)
        return result
