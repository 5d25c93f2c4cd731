"""
Mock Embedding Client
For development and testing without a running embedding service
"""

import hashlib
import math
import random
from collections import deque

from ragserver.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_MOCK_DIMENSION = 384
# Texts kept in `calls`, most recent last
MAX_RECORDED_CALLS = 100


class MockEmbeddingClient:
    """
    Deterministic embedding client

    The same text always maps to the same L2-normalised vector, seeded
    from a SHA-256 digest of the text.
    """

    def __init__(self, dimension: int = DEFAULT_MOCK_DIMENSION):
        self.dimension = dimension
        self.calls: deque[str] = deque(maxlen=MAX_RECORDED_CALLS)
        logger.info("mock_embedding_client_initialized", dimension=dimension)

    async def embed(self, text: str) -> list[float]:
        self.calls.append(text)

        seed = int.from_bytes(hashlib.sha256(text.encode("utf-8")).digest()[:8], "big")
        rng = random.Random(seed)
        raw = [rng.gauss(0.0, 1.0) for _ in range(self.dimension)]
        norm = math.sqrt(sum(v * v for v in raw)) or 1.0

        logger.debug("mock_text_embedded", text_length=len(text), embedding_dim=self.dimension)
        return [v / norm for v in raw]

    async def aclose(self) -> None:
        return None
