"""
Service Layer
Business logic between routers and external clients
"""

from ragserver.services.rag_service import RAGService

__all__ = ["RAGService"]
