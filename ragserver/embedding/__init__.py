"""
Embedding Client Abstraction
Interface and implementations for text-to-vector embedding
"""

from ragserver.embedding.protocol import EmbeddingClientProtocol
from ragserver.embedding.factory import get_embedding_client

__all__ = ["EmbeddingClientProtocol", "get_embedding_client"]
