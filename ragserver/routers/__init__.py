"""
API Routers
FastAPI route handlers
"""

from ragserver.routers import embed, indexes, query

__all__ = ["embed", "indexes", "query"]
