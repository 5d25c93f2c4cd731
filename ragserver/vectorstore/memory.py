"""
In-memory VectorStore Implementation
For development/testing without a Pinecone account.

Scores follow the index metric: cosine similarity, dot product, or the
negated euclidean distance (so that higher is always more similar).
"""

from __future__ import annotations

import asyncio
import math
from dataclasses import dataclass, field
from typing import Sequence

from ragserver.core.exceptions import (
    DimensionMismatchError,
    IndexAlreadyExistsError,
    IndexNotFoundError,
)
from ragserver.core.logging import get_logger
from ragserver.vectorstore.protocol import VectorMatch

logger = get_logger(__name__)


@dataclass
class _MemoryIndex:
    dimension: int
    metric: str = "cosine"
    records: dict[str, tuple[list[float], dict]] = field(default_factory=dict)


def _score(metric: str, a: Sequence[float], b: Sequence[float]) -> float:
    if metric == "dotproduct":
        return sum(x * y for x, y in zip(a, b))
    if metric == "euclidean":
        return -math.sqrt(sum((x - y) ** 2 for x, y in zip(a, b)))

    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(y * y for y in b))
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return sum(x * y for x, y in zip(a, b)) / (norm_a * norm_b)


class InMemoryVectorStore:
    """
    VectorStore backed by a dictionary of indexes.

    With `auto_create=True` an upsert into an unknown index creates it,
    taking the dimension from the first vector.
    """

    def __init__(self, auto_create: bool = True):
        self.auto_create = auto_create
        self._indexes: dict[str, _MemoryIndex] = {}
        self._lock = asyncio.Lock()
        logger.info("memory_vectorstore_initialized", auto_create=auto_create)

    async def upsert(
        self,
        index_name: str,
        id: str,
        vector: Sequence[float],
        metadata: dict | None = None,
    ) -> None:
        async with self._lock:
            index = self._indexes.get(index_name)
            if index is None:
                if not self.auto_create:
                    raise IndexNotFoundError(index_name)
                index = _MemoryIndex(dimension=len(vector))
                self._indexes[index_name] = index
                logger.info("memory_index_auto_created", index=index_name, dimension=index.dimension)

            self._check_dimension(index_name, index, vector)
            index.records[id] = (list(vector), dict(metadata or {}))

        logger.debug("memory_upserted", index=index_name, record_id=id)

    async def query(
        self,
        index_name: str,
        vector: Sequence[float],
        top_k: int,
        score_threshold: float | None = None,
    ) -> list[VectorMatch]:
        async with self._lock:
            index = self._indexes.get(index_name)
            if index is None:
                raise IndexNotFoundError(index_name)
            self._check_dimension(index_name, index, vector)
            records = list(index.records.items())
            metric = index.metric

        results = [
            VectorMatch(id=record_id, score=_score(metric, vector, values), metadata=dict(metadata))
            for record_id, (values, metadata) in records
        ]
        if score_threshold is not None:
            results = [r for r in results if r.score >= score_threshold]
        results.sort(key=lambda r: r.score, reverse=True)

        logger.debug(
            "memory_search_completed",
            index=index_name,
            results_found=len(results),
            top_k=top_k,
        )
        return results[:top_k]

    async def create_index(
        self,
        index_name: str,
        dimension: int,
        metric: str = "cosine",
    ) -> None:
        async with self._lock:
            if index_name in self._indexes:
                raise IndexAlreadyExistsError(index_name)
            self._indexes[index_name] = _MemoryIndex(dimension=dimension, metric=metric)
        logger.info("memory_index_created", index=index_name, dimension=dimension, metric=metric)

    async def close(self) -> None:
        return None

    def count(self, index_name: str) -> int:
        index = self._indexes.get(index_name)
        return len(index.records) if index else 0

    @staticmethod
    def _check_dimension(index_name: str, index: _MemoryIndex, vector: Sequence[float]) -> None:
        if len(vector) != index.dimension:
            raise DimensionMismatchError(
                f"Vector dimension {len(vector)} does not match index '{index_name}' "
                f"dimension {index.dimension}",
                details={
                    "index_name": index_name,
                    "expected": index.dimension,
                    "actual": len(vector),
                },
            )
