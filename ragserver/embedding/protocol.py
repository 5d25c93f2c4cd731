"""
Embedding Client Protocol (Interface)
Defines contract for all embedding client implementations
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class EmbeddingClientProtocol(Protocol):
    """
    Protocol for embedding client implementations

    Implementations turn one text into one fixed-length vector. The
    dimensionality is a property of the model behind the client.
    """

    async def embed(self, text: str) -> list[float]:
        """
        Embed a single text

        Args:
            text: Text to embed (non-empty)

        Returns:
            Embedding vector

        Raises:
            EmbeddingServiceError: On connection failure, non-2xx status,
                malformed response body or timeout
        """
        ...

    async def aclose(self) -> None:
        """Release network resources held by the client."""
        ...
