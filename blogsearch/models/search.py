"""
Search request and response models.

Dependencies: pydantic
System role: Contracts for the hybrid search orchestrator and the search API
"""

import enum
import uuid
from dataclasses import dataclass

from pydantic import BaseModel, Field

from blogsearch.models.document import Document


class CandidateSource(str, enum.Enum):
    """Branch that produced a hit."""

    LEXICAL = "lexical"
    VECTOR = "vector"


class SearchType(str, enum.Enum):
    """Which branches contributed to a result page."""

    TRADITIONAL = "traditional"
    HYBRID = "hybrid"
    VECTOR = "vector"


@dataclass(frozen=True)
class SearchCandidate:
    """Best fragment match for one document, alive for a single query."""

    document_id: uuid.UUID
    similarity: float
    matched_fragment: str
    source: CandidateSource


class SearchOptions(BaseModel):
    """Options for hybrid search."""

    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=10, ge=1)
    category: str | None = Field(default=None, description="Category slug filter")
    tag: str | None = Field(default=None, description="Tag slug filter")
    only_published: bool = True
    min_similarity: float | None = Field(
        default=None,
        ge=0.0,
        le=1.0,
        description="Overrides the adaptive similarity threshold",
    )


class VectorSearchOptions(BaseModel):
    """Options for vector-only search."""

    limit: int = Field(default=10, ge=1)
    min_similarity: float | None = Field(default=None, ge=0.0, le=1.0)
    page: int = Field(default=1, ge=1)
    only_published: bool = True


class SearchHit(BaseModel):
    """A document on a result page with its match metadata."""

    document: Document
    source: CandidateSource
    similarity: float | None = None
    snippet: str | None = None


class SearchResult(BaseModel):
    """Result page, or a failure description when success is False."""

    success: bool = True
    query: str
    results: list[SearchHit] = Field(default_factory=list)
    total_count: int = 0
    page: int = 1
    total_pages: int = 0
    search_type: SearchType | None = None
    lexical_count: int = 0
    vector_count: int = 0
    threshold: float | None = Field(
        default=None,
        description="Similarity cutoff used by the vector branch, if it ran",
    )
    error: str | None = None

    @classmethod
    def failure(cls, query: str, page: int, error: str) -> "SearchResult":
        """Build an empty failed result."""
        return cls(success=False, query=query, page=page, error=error)
