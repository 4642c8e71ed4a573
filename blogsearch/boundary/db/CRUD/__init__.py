"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from blogsearch.boundary.db.CRUD import post_crud, index_job_crud

    post = await post_crud.get_by_id(db, post_id)
"""

from blogsearch.boundary.db.CRUD.base_crud import BaseCRUD
from blogsearch.boundary.db.CRUD.index_job_crud import IndexJobCRUD, index_job_crud
from blogsearch.boundary.db.CRUD.post_crud import PostCRUD, escape_like, post_crud
from blogsearch.boundary.db.CRUD.taxonomy_crud import (
    CategoryCRUD,
    TagCRUD,
    category_crud,
    tag_crud,
)

__all__ = [
    "BaseCRUD",
    "IndexJobCRUD",
    "index_job_crud",
    "PostCRUD",
    "escape_like",
    "post_crud",
    "CategoryCRUD",
    "TagCRUD",
    "category_crud",
    "tag_crud",
]
