"""
Indexing: token counting, chunking, embedding and vector record writes.
"""

from blogsearch.core.indexing.chunker import Chunker, reconstruct
from blogsearch.core.indexing.embedding_client import EmbeddingClient
from blogsearch.core.indexing.embedding_pipeline import EmbeddingPipeline, IndexingMode, IndexingResult
from blogsearch.core.indexing.token_counter import (
    RegexTokenCounter,
    TiktokenCounter,
    TokenCounter,
    build_token_counter,
)

__all__ = [
    "Chunker",
    "reconstruct",
    "EmbeddingClient",
    "EmbeddingPipeline",
    "IndexingMode",
    "IndexingResult",
    "RegexTokenCounter",
    "TiktokenCounter",
    "TokenCounter",
    "build_token_counter",
]
