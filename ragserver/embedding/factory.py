"""
Embedding Client Factory
Creates appropriate embedding client based on configuration
"""

from ragserver.core.config import Settings, settings as default_settings
from ragserver.core.logging import get_logger
from ragserver.core.retry import RetryPolicy
from ragserver.embedding.http import HTTPEmbeddingClient
from ragserver.embedding.mock import DEFAULT_MOCK_DIMENSION, MockEmbeddingClient
from ragserver.embedding.protocol import EmbeddingClientProtocol

logger = get_logger(__name__)


def get_embedding_client(settings: Settings | None = None) -> EmbeddingClientProtocol:
    """
    Get embedding client implementation based on configuration

    Args:
        settings: Settings to build from (defaults to the process settings)

    Returns:
        Embedding client implementation

    Raises:
        ValueError: If embedding_provider is not supported

    Usage:
        client = get_embedding_client()
        vector = await client.embed("hello")
    """
    settings = settings or default_settings
    provider = settings.embedding_provider

    logger.info("embedding_client_factory", provider=provider)

    if provider == "http":
        return HTTPEmbeddingClient(
            base_url=settings.embedding_base_url,
            timeout=settings.embedding_timeout_seconds,
            retry_policy=RetryPolicy.from_settings(settings),
        )

    if provider == "mock":
        return MockEmbeddingClient(dimension=settings.embedding_dimension or DEFAULT_MOCK_DIMENSION)

    raise ValueError(
        f"Unsupported embedding_provider: {provider}. Supported providers: http, mock"
    )


# Singleton instance for dependency injection
_embedding_client: EmbeddingClientProtocol | None = None


def get_embedding_client_instance() -> EmbeddingClientProtocol:
    """
    Get singleton embedding client instance

    Returns:
        Embedding client instance
    """
    global _embedding_client
    if _embedding_client is None:
        _embedding_client = get_embedding_client()
    return _embedding_client


async def close_embedding_client() -> None:
    """Close and forget the singleton (application shutdown)."""
    global _embedding_client
    if _embedding_client is not None:
        await _embedding_client.aclose()
        _embedding_client = None
