"""
FastAPI Application Factory

Creates and configures FastAPI application
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from ragserver.core.config import settings
from ragserver.core.logging import configure_logging, get_logger
from ragserver.embedding.factory import close_embedding_client, get_embedding_client_instance
from ragserver.vectorstore.factory import close_vectorstore, get_vectorstore_instance
from ragserver.routers import embed, indexes, query
from ragserver.api.error_handlers import register_exception_handlers
from ragserver.api.request_context import RequestContextMiddleware

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan events

    Startup:
        - Configure logging
        - Build the embedding client and vector store once, so missing
          credentials fail the process before it accepts traffic

    Shutdown:
        - Close outbound clients
    """
    configure_logging()
    logger.info("application_startup", environment=settings.environment)

    get_embedding_client_instance()
    get_vectorstore_instance()
    logger.info(
        "upstream_clients_ready",
        embedding_provider=settings.embedding_provider,
        embedding_url=settings.embedding_base_url,
        vectorstore_type=settings.vectorstore_type,
        namespace=settings.pinecone_namespace,
    )

    yield

    logger.info("application_shutdown")
    await close_embedding_client()
    await close_vectorstore()


def create_app() -> FastAPI:
    """
    Create FastAPI application

    Returns:
        Configured FastAPI app instance

    Usage:
        app = create_app()
        uvicorn.run(app, host=settings.host, port=settings.port)
    """
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Embed text into and query Pinecone indexes through a remote embedding service",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    app.add_middleware(RequestContextMiddleware)

    # Include routers
    app.include_router(embed.router)
    app.include_router(query.router)
    app.include_router(indexes.router)

    register_exception_handlers(app)

    # Health check endpoint
    @app.get("/health", tags=["health"])
    async def health_check() -> dict:
        """
        Health check endpoint

        Returns:
            Status dict
        """
        return {
            "status": "ok",
            "app": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment,
        }

    logger.info("fastapi_app_created", routes=len(app.routes))

    return app


# Application instance
app = create_app()
