"""
VectorStore Factory
Creates appropriate VectorStore implementation based on configuration
"""

from ragserver.core.config import Settings, settings as default_settings
from ragserver.core.logging import get_logger
from ragserver.vectorstore.memory import InMemoryVectorStore
from ragserver.vectorstore.pinecone_store import PineconeVectorStore
from ragserver.vectorstore.protocol import VectorStoreProtocol

logger = get_logger(__name__)


def get_vectorstore(settings: Settings | None = None) -> VectorStoreProtocol:
    """
    Get VectorStore implementation based on configuration

    Args:
        settings: Settings to build from (defaults to the process settings)

    Returns:
        VectorStore implementation

    Raises:
        ConfigurationError: If pinecone is selected without an API key
        ValueError: If vectorstore_type is not supported
    """
    settings = settings or default_settings
    vectorstore_type = settings.vectorstore_type

    logger.info("vectorstore_factory", vectorstore_type=vectorstore_type)

    if vectorstore_type == "pinecone":
        return PineconeVectorStore.from_settings(settings)

    if vectorstore_type == "memory":
        return InMemoryVectorStore()

    raise ValueError(
        f"Unsupported vectorstore_type: {vectorstore_type}. Supported types: pinecone, memory"
    )


# Singleton instance for dependency injection
_vectorstore: VectorStoreProtocol | None = None


def get_vectorstore_instance() -> VectorStoreProtocol:
    """
    Get singleton VectorStore instance

    Returns:
        VectorStore shared by all requests
    """
    global _vectorstore
    if _vectorstore is None:
        _vectorstore = get_vectorstore()
    return _vectorstore


async def close_vectorstore() -> None:
    global _vectorstore
    if _vectorstore is not None:
        await _vectorstore.close()
        _vectorstore = None
