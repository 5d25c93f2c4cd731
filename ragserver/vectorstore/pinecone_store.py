"""
Pinecone VectorStore implementation.

The Pinecone SDK is synchronous, so every call is pushed to the default
threadpool executor and bounded by `asyncio.wait_for`. SDK exceptions are
translated into the RAG server exception hierarchy.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Sequence, TypeVar

from pinecone import Pinecone, ServerlessSpec
from pinecone.exceptions import (
    ForbiddenException,
    NotFoundException,
    PineconeApiException,
    PineconeException,
    UnauthorizedException,
)

from ragserver.core.config import Settings
from ragserver.core.exceptions import (
    ConfigurationError,
    DimensionMismatchError,
    IndexAlreadyExistsError,
    IndexNotFoundError,
    VectorStoreError,
    VectorStoreTimeoutError,
)
from ragserver.core.logging import get_logger, measure_latency
from ragserver.core.retry import RetryPolicy
from ragserver.vectorstore.protocol import VectorMatch, VectorStoreProtocol

logger = get_logger(__name__)

T = TypeVar("T")


class PineconeVectorStore(VectorStoreProtocol):
    """Pinecone-backed VectorStore.

    All records live in one namespace (`pinecone_namespace`); the index is
    chosen per call.
    """

    def __init__(
        self,
        *,
        api_key: str | None,
        namespace: str = "",
        host: str | None = None,
        cloud: str = "aws",
        region: str = "us-east-1",
        deletion_protection: str = "enabled",
        timeout: float = 30.0,
        retry_policy: RetryPolicy | None = None,
        client: Pinecone | None = None,
    ) -> None:
        if client is None:
            if not api_key:
                raise ConfigurationError("PINECONE_API_KEY must be set when vectorstore_type=pinecone")
            client = Pinecone(api_key=api_key, host=host) if host else Pinecone(api_key=api_key)

        self.client = client
        self.namespace = namespace
        self.cloud = cloud
        self.region = region
        self.deletion_protection = deletion_protection
        self.timeout = timeout
        self.retry_policy = retry_policy or RetryPolicy.no_retry()
        # index name -> metric; an index's metric never changes after creation
        self._metrics: dict[str, str] = {}
        logger.info(
            "pinecone_vectorstore_initialized",
            namespace=namespace,
            cloud=cloud,
            region=region,
            timeout=timeout,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> PineconeVectorStore:
        return cls(
            api_key=settings.pinecone_api_key,
            namespace=settings.pinecone_namespace,
            host=settings.pinecone_host,
            cloud=settings.pinecone_cloud,
            region=settings.pinecone_region,
            deletion_protection=settings.pinecone_deletion_protection,
            timeout=settings.pinecone_timeout_seconds,
            retry_policy=RetryPolicy.from_settings(settings),
        )

    async def upsert(
        self,
        index_name: str,
        id: str,
        vector: Sequence[float],
        metadata: dict | None = None,
    ) -> None:
        record = {"id": id, "values": list(vector), "metadata": metadata or {}}

        def _upsert() -> Any:
            index = self.client.Index(index_name)
            return index.upsert(vectors=[record], namespace=self.namespace, show_progress=False)

        response = await self.retry_policy.run(
            "pinecone.upsert",
            lambda: self._call("upsert", index_name, _upsert),
        )
        logger.info(
            "pinecone_upserted",
            index=index_name,
            record_id=id,
            upserted_count=getattr(response, "upserted_count", None),
        )

    async def query(
        self,
        index_name: str,
        vector: Sequence[float],
        top_k: int,
        score_threshold: float | None = None,
    ) -> list[VectorMatch]:
        """
        Search `index_name` in the configured namespace.

        Euclidean indexes answer with distances (lower is nearer); those
        are negated so that a higher score always means more similar, as in
        the in-memory store.
        """
        metric = await self._index_metric(index_name)

        def _query() -> Any:
            index = self.client.Index(index_name)
            return index.query(
                vector=list(vector),
                top_k=top_k,
                namespace=self.namespace,
                include_metadata=True,
                include_values=False,
            )

        response = await self.retry_policy.run(
            "pinecone.query",
            lambda: self._call("query", index_name, _query),
        )

        sign = -1.0 if metric == "euclidean" else 1.0
        matches = [
            VectorMatch(id=m.id, score=sign * float(m.score), metadata=dict(m.metadata or {}))
            for m in (response.matches or [])
        ]
        if score_threshold is not None:
            matches = [m for m in matches if m.score >= score_threshold]
        matches.sort(key=lambda m: m.score, reverse=True)

        logger.info(
            "pinecone_queried",
            index=index_name,
            metric=metric,
            top_k=top_k,
            results_found=len(response.matches or []),
            results_returned=len(matches),
        )
        return matches[:top_k]

    async def create_index(
        self,
        index_name: str,
        dimension: int,
        metric: str = "cosine",
    ) -> None:
        def _create() -> Any:
            return self.client.create_index(
                name=index_name,
                dimension=dimension,
                metric=metric,
                spec=ServerlessSpec(cloud=self.cloud, region=self.region),
                deletion_protection=self.deletion_protection,
                timeout=-1,  # Do not wait for the index to become ready
            )

        # Index creation is not idempotent; never retried
        await self._call("create_index", index_name, _create)
        self._metrics[index_name] = metric
        logger.info(
            "pinecone_index_created",
            index=index_name,
            dimension=dimension,
            metric=metric,
        )

    async def close(self) -> None:
        return None

    # Private helper methods ------------------------------------------------

    async def _index_metric(self, index_name: str) -> str:
        """Metric of `index_name`, described once and then cached."""
        metric = self._metrics.get(index_name)
        if metric is not None:
            return metric

        description = await self.retry_policy.run(
            "pinecone.describe_index",
            lambda: self._call(
                "describe_index",
                index_name,
                lambda: self.client.describe_index(index_name),
            ),
        )
        raw = getattr(description, "metric", None) or "cosine"
        metric = str(getattr(raw, "value", raw)).lower()
        self._metrics[index_name] = metric
        logger.debug("pinecone_index_metric_cached", index=index_name, metric=metric)
        return metric

    @measure_latency("pinecone.call")
    async def _call(self, operation: str, index_name: str, func: Callable[[], T]) -> T:
        loop = asyncio.get_running_loop()
        try:
            return await asyncio.wait_for(
                loop.run_in_executor(None, func),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as exc:
            logger.error("pinecone_timeout", operation=operation, index=index_name, timeout=self.timeout)
            raise VectorStoreTimeoutError(
                f"Pinecone {operation} on '{index_name}' timed out after {self.timeout}s"
            ) from exc
        except PineconeException as exc:
            raise self._translate(operation, index_name, exc) from exc
        except Exception as exc:  # noqa: BLE001
            logger.error("pinecone_transport_error", operation=operation, index=index_name, error=str(exc))
            raise VectorStoreError(
                f"Pinecone {operation} on '{index_name}' failed: {exc}",
                transient=True,
            ) from exc

    @staticmethod
    def _translate(operation: str, index_name: str, exc: PineconeException) -> VectorStoreError:
        if isinstance(exc, NotFoundException):
            logger.warning("pinecone_index_not_found", operation=operation, index=index_name)
            return IndexNotFoundError(index_name)

        if isinstance(exc, (UnauthorizedException, ForbiddenException)):
            logger.error("pinecone_auth_failed", operation=operation, index=index_name)
            return VectorStoreError(
                f"Pinecone rejected the credentials for {operation} on '{index_name}'",
                code="VectorStoreAuthError",
            )

        if isinstance(exc, PineconeApiException):
            # Current SDKs expose `status_code`; older ones used `status`
            status = getattr(exc, "status_code", None) or getattr(exc, "status", None) or 0
            body = f"{getattr(exc, 'message', exc)} {getattr(exc, 'body', None) or ''}".strip()
            logger.error(
                "pinecone_api_error",
                operation=operation,
                index=index_name,
                status=status,
                body=body[:500],
            )
            if status == 409 and operation == "create_index":
                return IndexAlreadyExistsError(index_name)
            if status == 400 and "dimension" in body.lower():
                return DimensionMismatchError(
                    f"Vector dimension does not match index '{index_name}': {body[:300]}",
                    details={"index_name": index_name},
                )
            return VectorStoreError(
                f"Pinecone {operation} on '{index_name}' failed with status {status}",
                transient=status >= 500 or status == 429,
                details={"status_code": status},
            )

        logger.error("pinecone_error", operation=operation, index=index_name, error=str(exc))
        return VectorStoreError(f"Pinecone {operation} on '{index_name}' failed: {exc}")
