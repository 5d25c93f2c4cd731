"""
Application Entry Point
Run with: python main.py or uvicorn ragserver.api.main:app
"""

import uvicorn

from ragserver.core.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "ragserver.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development" and settings.debug,
        log_level=settings.log_level.lower(),
    )
