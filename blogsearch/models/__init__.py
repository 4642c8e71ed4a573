"""
Domain models shared by the indexing pipeline, search engine and API.

Dependencies: pydantic
"""

from blogsearch.models.document import Document, DocumentFilters
from blogsearch.models.embedding import ChunkSpec, ContentType, EmbeddingRecord, NearestMatch
from blogsearch.models.search import (
    CandidateSource,
    SearchCandidate,
    SearchHit,
    SearchOptions,
    SearchResult,
    SearchType,
    VectorSearchOptions,
)

__all__ = [
    "Document",
    "DocumentFilters",
    "ChunkSpec",
    "ContentType",
    "EmbeddingRecord",
    "NearestMatch",
    "CandidateSource",
    "SearchCandidate",
    "SearchHit",
    "SearchOptions",
    "SearchResult",
    "SearchType",
    "VectorSearchOptions",
]
