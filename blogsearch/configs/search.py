"""
Search configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Hybrid search orchestrator configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SearchSettings(BaseSettings):
    """Hybrid search tuning knobs."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SEARCH_",
        case_sensitive=False,
        extra="ignore",
    )

    supplement_ratio: float = Field(
        default=0.8,
        gt=0.0,
        le=1.0,
        description="Run vector search when lexical hits fall below page_size * ratio",
    )
    snippet_length: int = Field(
        default=200,
        ge=1,
        description="Characters of the matched fragment kept as snippet",
    )
    timeout_seconds: float = Field(
        default=10.0,
        gt=0.0,
        description="Upper bound for one search request",
    )
    default_page_size: int = Field(default=10, ge=1, description="Default page size")
    max_page_size: int = Field(default=50, ge=1, description="Largest accepted page size")
