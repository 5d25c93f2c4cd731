"""
RAG server: embed text into, and query, Pinecone indexes through a remote
embedding service.
"""

__version__ = "0.1.0"
