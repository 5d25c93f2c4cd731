"""
Application Configuration
Pydantic Settings for environment-based configuration
"""

from typing import Literal
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings from environment variables

    Loaded once at startup; clients receive this object through their
    factories instead of reading the environment per request.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Application
    app_name: str = "RAG Server"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"

    # HTTP server
    host: str = "127.0.0.1"
    port: int = Field(default=8081, ge=1, le=65535)

    # Embedding Service (remote inference endpoint)
    embedding_provider: Literal["http", "mock"] = "http"
    embedding_host: str = "127.0.0.1"
    embedding_port: int = Field(default=8080, ge=1, le=65535)
    embedding_service_url: str | None = None  # Overrides host/port when set
    embedding_timeout_seconds: float = Field(default=30.0, gt=0)
    embedding_dimension: int | None = Field(default=None, ge=1)

    # VectorStore
    vectorstore_type: Literal["pinecone", "memory"] = "pinecone"

    # Pinecone specific (when vectorstore_type == "pinecone")
    pinecone_api_key: str | None = None
    pinecone_host: str | None = None  # Control plane override (e.g. local emulator)
    pinecone_namespace: str = ""
    pinecone_cloud: Literal["aws", "gcp", "azure"] = "aws"
    pinecone_region: str = "us-east-1"
    pinecone_deletion_protection: Literal["enabled", "disabled"] = "enabled"
    pinecone_timeout_seconds: float = Field(default=30.0, gt=0)

    # Search Configuration
    search_top_k: int = Field(default=10, ge=1)

    # Content splitting on /embed
    split_criteria: Literal["none", "paragraph", "sentence"] = "none"

    # Upstream retry policy (embedding service + vector store)
    upstream_retry_max_attempts: int = Field(default=3, ge=1)
    upstream_retry_base_delay_seconds: float = Field(default=0.2, ge=0)
    upstream_retry_backoff_factor: float = Field(default=2.0, ge=1)
    upstream_retry_max_delay_seconds: float = Field(default=5.0, ge=0)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_json: bool = False  # Structured JSON logging

    @field_validator("embedding_service_url", "pinecone_host")
    @classmethod
    def _strip_trailing_slash(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v.strip().rstrip("/")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return (v or "INFO").upper()

    @property
    def embedding_base_url(self) -> str:
        """Base URL of the embedding service"""
        if self.embedding_service_url:
            return self.embedding_service_url
        return f"http://{self.embedding_host}:{self.embedding_port}"


# Global settings instance
settings = Settings()
