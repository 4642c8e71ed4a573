"""
Indexing configuration settings.

Token ceilings and chunk geometry for the embedding pipeline. Passed into
the pipeline explicitly so tests can shrink them.

Dependencies: pydantic, pydantic_settings
System role: Embedding pipeline configuration
"""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class IndexingSettings(BaseSettings):
    """Chunking and token-limit configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="INDEXING_",
        case_sensitive=False,
        extra="ignore",
    )

    tokenizer: str = Field(
        default="tiktoken",
        description="Token counter: 'tiktoken' or 'regex'",
    )
    encoding_name: str = Field(
        default="cl100k_base",
        description="tiktoken encoding used when tokenizer='tiktoken'",
    )
    max_tokens: int = Field(
        default=2000,
        ge=1,
        description="Bodies at or below this token count are embedded whole",
    )
    chunk_max_tokens: int = Field(
        default=500,
        ge=1,
        description="Maximum tokens per chunk for long bodies",
    )
    chunk_overlap_tokens: int = Field(
        default=50,
        ge=0,
        description="Tokens repeated from the previous chunk",
    )

    @model_validator(mode="after")
    def _check_overlap(self) -> "IndexingSettings":
        if self.chunk_overlap_tokens >= self.chunk_max_tokens:
            raise ValueError("chunk_overlap_tokens must be smaller than chunk_max_tokens")
        return self
