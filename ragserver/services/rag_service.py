"""
RAG Service

Orchestrates the embed and query flows:

    /embed : validated request -> [split] -> embed(chunk) -> upsert(...)
    /query : validated request -> embed(query_text) -> query(...) -> rank

The two outbound calls of one request are strictly sequential. Any error
ends the request; nothing is retried here beyond the clients' own retry
policy and no partial success is reported.
"""

from __future__ import annotations

from typing import Iterable

from ragserver.core.exceptions import DimensionMismatchError, EmbeddingServiceError, ValidationError
from ragserver.embedding.protocol import EmbeddingClientProtocol
from ragserver.schemas.embed import EmbedRequest, EmbedResponse
from ragserver.schemas.index import CreateIndexRequest, CreateIndexResponse
from ragserver.schemas.query import QueryMatch, QueryRequest, QueryResponse
from ragserver.services.base import BaseService
from ragserver.services.splitter import SplitCriteria, split_content
from ragserver.vectorstore.protocol import VectorMatch, VectorStoreProtocol


def rank_matches(
    matches: Iterable[VectorMatch],
    top_k: int,
    score_threshold: float | None = None,
) -> list[VectorMatch]:
    """Filter by threshold, order by descending score and truncate to top_k."""

    kept = [m for m in matches if score_threshold is None or m.score >= score_threshold]
    kept.sort(key=lambda m: m.score, reverse=True)
    return kept[:top_k]


class RAGService(BaseService):
    """Embed/query orchestration over an embedding client and a vector store."""

    def __init__(
        self,
        *,
        embedding_client: EmbeddingClientProtocol,
        vectorstore: VectorStoreProtocol,
        default_top_k: int = 10,
        split_criteria: SplitCriteria | str = SplitCriteria.NONE,
        embedding_dimension: int | None = None,
    ) -> None:
        super().__init__(embedding_client=embedding_client, vectorstore=vectorstore)
        self.default_top_k = default_top_k
        self.split_criteria = SplitCriteria(split_criteria)
        self.embedding_dimension = embedding_dimension

    async def embed(self, request: EmbedRequest) -> EmbedResponse:
        """
        Embed `request.content` and store it under `request.query_id`.

        With splitting enabled and more than one chunk, records are stored
        as `{query_id}-{n}`; every record carries the request's metadata
        plus its own `text`.

        Raises:
            ValidationError: If splitting leaves nothing to embed
            EmbeddingServiceError: If the embedding call fails
            VectorStoreError: If the upsert fails
        """

        async def _run() -> EmbedResponse:
            chunks = split_content(request.content, self.split_criteria)
            if not chunks:
                raise ValidationError("content has no text to embed")

            base_metadata = request.record_metadata()
            for position, chunk in enumerate(chunks):
                record_id = request.query_id if len(chunks) == 1 else f"{request.query_id}-{position}"
                metadata = {**base_metadata, "text": chunk}
                if len(chunks) > 1:
                    metadata["chunk"] = position

                self.logger.debug("request_stage", stage="embedding_in_flight", record_id=record_id)
                vector = await self._embed_text(chunk)

                self.logger.debug("request_stage", stage="store_in_flight", record_id=record_id)
                await self.vectorstore.upsert(request.index_name, record_id, vector, metadata)

            return EmbedResponse(query_id=request.query_id, records=len(chunks))

        return await self._execute_with_handling("embed", _run, payload=request)

    async def query(self, request: QueryRequest) -> QueryResponse:
        """
        Embed `request.query_text` and search `request.index_name`.

        Results never exceed top_k, never score below score_threshold and
        are ordered by descending score, whatever the backend returns.

        Raises:
            EmbeddingServiceError: If the embedding call fails (no search is made)
            IndexNotFoundError: If the index does not exist
            VectorStoreError: If the search fails
        """

        async def _run() -> QueryResponse:
            top_k = request.top_k or self.default_top_k

            self.logger.debug("request_stage", stage="embedding_in_flight", index=request.index_name)
            vector = await self._embed_text(request.query_text)

            self.logger.debug("request_stage", stage="search_in_flight", index=request.index_name)
            matches = await self.vectorstore.query(
                request.index_name,
                vector,
                top_k,
                request.score_threshold,
            )

            ranked = rank_matches(matches, top_k, request.score_threshold)
            results = [
                QueryMatch(id=m.id, score=m.score, metadata=m.metadata or {}) for m in ranked
            ]
            return QueryResponse(index_name=request.index_name, results=results, count=len(results))

        return await self._execute_with_handling("query", _run, payload=request)

    async def create_index(self, request: CreateIndexRequest) -> CreateIndexResponse:
        """Create a new index sized for the embedding model."""

        async def _run() -> CreateIndexResponse:
            if self.embedding_dimension and request.dimension != self.embedding_dimension:
                self.logger.warning(
                    "index_dimension_differs_from_embedding_dimension",
                    index=request.index_name,
                    index_dimension=request.dimension,
                    embedding_dimension=self.embedding_dimension,
                )
            await self.vectorstore.create_index(
                request.index_name,
                request.dimension,
                request.metric.value,
            )
            return CreateIndexResponse(
                index_name=request.index_name,
                dimension=request.dimension,
                metric=request.metric,
            )

        return await self._execute_with_handling("create_index", _run, payload=request)

    # Private helper methods ------------------------------------------------

    async def _embed_text(self, text: str) -> list[float]:
        vector = await self.embedding_client.embed(text)
        if not vector:
            raise EmbeddingServiceError("Embedding service returned an empty vector")
        if self.embedding_dimension and len(vector) != self.embedding_dimension:
            raise DimensionMismatchError(
                f"Embedding dimension {len(vector)} does not match configured "
                f"dimension {self.embedding_dimension}",
                details={"expected": self.embedding_dimension, "actual": len(vector)},
            )
        return vector
