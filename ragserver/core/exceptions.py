"""
Custom Exceptions for the RAG server
"""


class RAGServerError(Exception):
    """Base exception for all RAG server errors"""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        *,
        transient: bool = False,
        details: dict | None = None,
    ):
        self.message = message
        self.code = code or self.__class__.__name__
        # Transient failures may succeed on retry (timeouts, 5xx, transport errors)
        self.transient = transient
        self.details = details
        super().__init__(self.message)


# Configuration Exceptions
class ConfigurationError(RAGServerError):
    """Required configuration is missing or invalid"""

    pass


# Validation Exceptions
class ValidationError(RAGServerError):
    """Input validation failed"""

    pass


# Embedding Service Exceptions
class EmbeddingServiceError(RAGServerError):
    """Embedding service call failed (connection, status, malformed body)"""

    pass


class EmbeddingTimeoutError(EmbeddingServiceError):
    """Embedding service did not answer within the configured timeout"""

    def __init__(self, message: str, code: str | None = None, **kwargs):
        kwargs.setdefault("transient", True)
        super().__init__(message, code, **kwargs)


# VectorStore Exceptions
class VectorStoreError(RAGServerError):
    """VectorStore operation failed (network, auth, dimension)"""

    pass


class VectorStoreTimeoutError(VectorStoreError):
    """VectorStore did not answer within the configured timeout"""

    def __init__(self, message: str, code: str | None = None, **kwargs):
        kwargs.setdefault("transient", True)
        super().__init__(message, code, **kwargs)


class DimensionMismatchError(VectorStoreError):
    """Vector dimensionality does not match the index"""

    pass


class IndexNotFoundError(VectorStoreError):
    """Requested index does not exist"""

    def __init__(self, index_name: str, message: str | None = None):
        self.index_name = index_name
        super().__init__(
            message or f"Index not found: {index_name}",
            details={"index_name": index_name},
        )


class IndexAlreadyExistsError(VectorStoreError):
    """Attempted to create an index that already exists"""

    def __init__(self, index_name: str):
        self.index_name = index_name
        super().__init__(
            f"Index already exists: {index_name}",
            details={"index_name": index_name},
        )
