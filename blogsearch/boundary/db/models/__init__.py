"""
Database models package.

Exports:
  - PostModel, CategoryModel, TagModel, post_tags: Blog content tables
  - PostEmbeddingModel: pgvector fragment rows
  - IndexJobModel, IndexAction, IndexJobStatus: Deferred indexing jobs

Dependencies: sqlalchemy, pgvector, blogsearch.boundary.db.base
System role: Database model definitions for domain entities
"""

from blogsearch.boundary.db.models.post_model import (
    CategoryModel,
    PostModel,
    TagModel,
    post_tags,
)
from blogsearch.boundary.db.models.embedding_model import PostEmbeddingModel
from blogsearch.boundary.db.models.index_job_model import (
    IndexAction,
    IndexJobModel,
    IndexJobStatus,
)

__all__ = [
    "CategoryModel",
    "PostModel",
    "TagModel",
    "post_tags",
    "PostEmbeddingModel",
    "IndexAction",
    "IndexJobModel",
    "IndexJobStatus",
]
