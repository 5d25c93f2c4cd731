"""
VectorStore Abstraction
Interface and implementations for vector upsert and similarity search
"""

from ragserver.vectorstore.protocol import VectorStoreProtocol, VectorMatch
from ragserver.vectorstore.factory import get_vectorstore

__all__ = ["VectorStoreProtocol", "VectorMatch", "get_vectorstore"]
