"""
VectorStore Protocol (Interface)
Defines contract for all VectorStore implementations
"""

from typing import NamedTuple, Protocol, Sequence, runtime_checkable


class VectorMatch(NamedTuple):
    """
    Single vector search result

    Attributes:
        id: Record identifier
        score: Similarity score (higher is more similar)
        metadata: Metadata stored with the record
    """

    id: str
    score: float
    metadata: dict | None = None


@runtime_checkable
class VectorStoreProtocol(Protocol):
    """
    Protocol for VectorStore implementations

    Indexes are addressed by name on every call; one store instance serves
    every index of the account it is connected to.
    """

    async def upsert(
        self,
        index_name: str,
        id: str,
        vector: Sequence[float],
        metadata: dict | None = None,
    ) -> None:
        """
        Insert or overwrite one record

        Args:
            index_name: Target index
            id: Record identifier
            vector: Embedding vector
            metadata: Metadata stored alongside the vector

        Raises:
            IndexNotFoundError: If the index does not exist
            DimensionMismatchError: If len(vector) differs from the index dimension
            VectorStoreError: On network or auth failure
        """
        ...

    async def query(
        self,
        index_name: str,
        vector: Sequence[float],
        top_k: int,
        score_threshold: float | None = None,
    ) -> list[VectorMatch]:
        """
        Search for the records most similar to `vector`

        Args:
            index_name: Index to search
            vector: Query embedding
            top_k: Maximum number of results
            score_threshold: Drop matches scoring below this value

        Returns:
            Matches ordered by similarity (highest first)

        Raises:
            IndexNotFoundError: If the index does not exist
            DimensionMismatchError: If len(vector) differs from the index dimension
            VectorStoreError: On network or auth failure
        """
        ...

    async def create_index(
        self,
        index_name: str,
        dimension: int,
        metric: str = "cosine",
    ) -> None:
        """
        Create a new index

        Raises:
            IndexAlreadyExistsError: If an index with this name exists
            VectorStoreError: If creation fails
        """
        ...

    async def close(self) -> None:
        """Release resources held by the store."""
        ...
