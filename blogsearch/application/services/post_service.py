"""
Post service orchestrator.

Write path for blog posts. Every write commits first and schedules
indexing second, so embedding trouble never loses a post.

Dependencies: blogsearch.boundary.db.CRUD, blogsearch.application.services.indexing_service
System role: Post lifecycle management
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from blogsearch.application.services.indexing_service import IndexingService
from blogsearch.boundary.db.base import utcnow
from blogsearch.boundary.db.CRUD.post_crud import post_crud
from blogsearch.boundary.db.CRUD.taxonomy_crud import category_crud, tag_crud
from blogsearch.boundary.db.models.index_job_model import IndexAction
from blogsearch.models.document import Document
from blogsearch.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class PostService:
    """Create, update and delete posts, keeping the vector index in step."""

    def __init__(self, db: AsyncSession, indexing_service: IndexingService) -> None:
        """
        Args:
            db: AsyncSession for database operations
            indexing_service: Scheduler for index jobs (shares db)
        """
        self.db = db
        self._indexing = indexing_service

    async def _schedule(self, post_id: UUID, action: IndexAction) -> None:
        """Schedule an index job; failures are logged, never raised."""
        try:
            await self._indexing.schedule(post_id, action)
        except Exception as e:
            await self.db.rollback()
            log_exception_with_context(
                logger,
                f"{__name__}:_schedule - Scheduling {action.value} failed",
                e,
                post_id=str(post_id),
            )

    async def create_post(
        self,
        title: str,
        content: str = "",
        brief: str | None = None,
        published: bool = False,
        category: str | None = None,
        tags: list[str] | None = None,
    ) -> Document:
        """
        Create a post and schedule its indexing.

        Args:
            title: Post title
            content: Body text
            brief: Optional summary
            published: Publish immediately
            category: Category slug (created when missing)
            tags: Tag slugs (created when missing)

        Returns:
            Document: The stored post
        """
        category_row = await category_crud.get_or_create(self.db, category) if category else None
        tag_rows = [await tag_crud.get_or_create(self.db, slug) for slug in tags or []]

        post = await post_crud.create(
            self.db,
            title=title,
            content=content,
            brief=brief,
            published=published,
            published_at=utcnow() if published else None,
            category=category_row,
            tags=tag_rows,
        )
        await self.db.commit()
        document = Document.from_model(post)

        await self._schedule(post.id, IndexAction.INDEX)
        logger.info(f"{__name__}:create_post - Created post", extra={"post_id": str(post.id)})
        return document

    async def update_post(
        self,
        post_id: UUID,
        title: str | None = None,
        content: str | None = None,
        brief: str | None = None,
        published: bool | None = None,
        category: str | None = None,
        tags: list[str] | None = None,
    ) -> Document | None:
        """
        Apply the given changes; None leaves a field untouched.

        A reindex job is scheduled only when title or content changed.

        Returns:
            Document | None: Updated post, or None when it doesn't exist
        """
        post = await post_crud.get_by_id(self.db, post_id)
        if post is None:
            return None

        text_changed = False
        if title is not None and title != post.title:
            post.title = title
            text_changed = True
        if content is not None and content != post.content:
            post.content = content
            text_changed = True
        if brief is not None:
            post.brief = brief
        if published is not None and published != post.published:
            post.published = published
            if published and post.published_at is None:
                post.published_at = utcnow()
        if category is not None:
            post.category = await category_crud.get_or_create(self.db, category)
        if tags is not None:
            post.tags = [await tag_crud.get_or_create(self.db, slug) for slug in tags]

        await self.db.commit()
        document = Document.from_model(post)

        if text_changed:
            await self._schedule(post_id, IndexAction.REINDEX)
        return document

    async def delete_post(self, post_id: UUID) -> bool:
        """
        Delete a post and schedule removal of its embeddings.

        Returns:
            bool: True if the post existed
        """
        deleted = await post_crud.delete_by_id(self.db, post_id)
        await self.db.commit()
        if deleted:
            await self._schedule(post_id, IndexAction.REMOVE)
        return deleted
