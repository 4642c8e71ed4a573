"""
Application services.

Exports:
  - IndexingService: Create and dispatch index jobs, report job status
  - IndexJobRunner: Execute one index job inside the worker
  - PostService: Post writes that schedule indexing after commit
"""

from blogsearch.application.services.indexing_service import IndexingService, IndexJobRunner
from blogsearch.application.services.post_service import PostService

__all__ = [
    "IndexingService",
    "IndexJobRunner",
    "PostService",
]
