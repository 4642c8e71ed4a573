"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Connection management
  - PostModel, CategoryModel, TagModel, PostEmbeddingModel, IndexJobModel: Tables
  - post_crud, category_crud, tag_crud, index_job_crud: CRUD singletons
  - DocumentStore, SqlDocumentStore: Read-side adapter for the search engine

Dependencies: sqlalchemy, pgvector, blogsearch.configs
System role: Database adapter for posts, embeddings and index jobs
"""

from blogsearch.boundary.db.base import Base, TimestampMixin, UUIDMixin
from blogsearch.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from blogsearch.boundary.db.models import (
    CategoryModel,
    IndexAction,
    IndexJobModel,
    IndexJobStatus,
    PostEmbeddingModel,
    PostModel,
    TagModel,
    post_tags,
)
from blogsearch.boundary.db.CRUD import (
    BaseCRUD,
    IndexJobCRUD,
    PostCRUD,
    category_crud,
    index_job_crud,
    post_crud,
    tag_crud,
)
from blogsearch.boundary.db.document_store import DocumentStore, SqlDocumentStore

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "CategoryModel",
    "IndexAction",
    "IndexJobModel",
    "IndexJobStatus",
    "PostEmbeddingModel",
    "PostModel",
    "TagModel",
    "post_tags",
    "BaseCRUD",
    "IndexJobCRUD",
    "PostCRUD",
    "category_crud",
    "index_job_crud",
    "post_crud",
    "tag_crud",
    "DocumentStore",
    "SqlDocumentStore",
]
