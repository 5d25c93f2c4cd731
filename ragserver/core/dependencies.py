"""
Common FastAPI dependencies
"""

from ragserver.core.config import settings
from ragserver.embedding.factory import get_embedding_client_instance
from ragserver.services.rag_service import RAGService
from ragserver.vectorstore.factory import get_vectorstore_instance


def get_rag_service() -> RAGService:
    """
    Dependency: Get RAGService instance

    Returns:
        RAGService wired to the process-wide embedding client and vector store
    """
    return RAGService(
        embedding_client=get_embedding_client_instance(),
        vectorstore=get_vectorstore_instance(),
        default_top_k=settings.search_top_k,
        split_criteria=settings.split_criteria,
        embedding_dimension=settings.embedding_dimension,
    )
