import pytest

from ragserver.embedding.mock import MockEmbeddingClient
from ragserver.services.rag_service import RAGService
from ragserver.vectorstore.memory import InMemoryVectorStore


TEST_DIMENSION = 8


@pytest.fixture
def embedding_client() -> MockEmbeddingClient:
    """Deterministic offline embedder"""
    return MockEmbeddingClient(dimension=TEST_DIMENSION)


@pytest.fixture
def vectorstore() -> InMemoryVectorStore:
    """Empty in-memory store that creates indexes on first upsert"""
    return InMemoryVectorStore()


@pytest.fixture
def rag_service(embedding_client, vectorstore) -> RAGService:
    return RAGService(
        embedding_client=embedding_client,
        vectorstore=vectorstore,
        default_top_k=10,
    )
