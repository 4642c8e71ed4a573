"""
Vector store configuration settings.

Selects the vector index backend and the embedding model that feeds it.

Dependencies: pydantic, pydantic_settings
System role: Vector index and embedding provider configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorStoreSettings(BaseSettings):
    """Vector store configuration (FAISS for dev, pgvector for prod)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    store_type: str = Field(
        default="pgvector",
        description="Vector store type: 'faiss' for local dev, 'pgvector' for production",
    )
    index_dir: str | None = Field(
        default=None,
        description="Directory for persisting the FAISS index (in-memory when unset)",
    )

    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Google Gemini embedding model ID",
    )
    embedding_dimension: int = Field(
        default=1024,
        description="Embedding vector dimension",
    )
