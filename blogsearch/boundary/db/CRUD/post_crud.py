"""
Post CRUD operations.

Extends BaseCRUD with the filtered substring queries used by the lexical
search branch and the id lookups used by the vector branch.

Dependencies: sqlalchemy, blogsearch.boundary.db.models
System role: Post persistence and lexical matching
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import ColumnElement, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from blogsearch.boundary.db.CRUD.base_crud import BaseCRUD
from blogsearch.boundary.db.models.post_model import CategoryModel, PostModel, TagModel
from blogsearch.models.document import DocumentFilters

LIKE_ESCAPE = "\\"


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input matches literally."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


class PostCRUD(BaseCRUD[PostModel]):
    """CRUD operations for PostModel."""

    def __init__(self) -> None:
        super().__init__(PostModel)

    @staticmethod
    def filter_clauses(
        query: str | None,
        filters: DocumentFilters,
    ) -> list[ColumnElement[bool]]:
        """
        WHERE clauses for a substring query plus publish/category/tag filters.

        Args:
            query: Substring matched case-insensitively against title,
                content and brief; no substring clause when empty
            filters: Publish status, category slug and tag slug filters

        Returns:
            list: Clauses to AND together
        """
        clauses: list[ColumnElement[bool]] = []
        if query:
            pattern = f"%{escape_like(query)}%"
            clauses.append(
                or_(
                    PostModel.title.ilike(pattern, escape=LIKE_ESCAPE),
                    PostModel.content.ilike(pattern, escape=LIKE_ESCAPE),
                    PostModel.brief.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
        if filters.only_published:
            clauses.append(PostModel.published.is_(True))
        if filters.category:
            clauses.append(PostModel.category.has(CategoryModel.slug == filters.category))
        if filters.tag:
            clauses.append(PostModel.tags.any(TagModel.slug == filters.tag))
        return clauses

    async def search_page(
        self,
        session: AsyncSession,
        query: str | None,
        filters: DocumentFilters,
        offset: int,
        limit: int,
    ) -> Sequence[PostModel]:
        """
        One page of matching posts, newest first.

        Ordering is coalesce(published_at, created_at) descending with the
        primary key as tie-breaker so pages are stable.
        """
        stmt = (
            select(PostModel)
            .where(*self.filter_clauses(query, filters))
            .order_by(
                func.coalesce(PostModel.published_at, PostModel.created_at).desc(),
                PostModel.id,
            )
            .offset(offset)
            .limit(limit)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_matching(
        self,
        session: AsyncSession,
        query: str | None,
        filters: DocumentFilters,
    ) -> int:
        """Total number of posts matching query and filters."""
        stmt = (
            select(func.count())
            .select_from(PostModel)
            .where(*self.filter_clauses(query, filters))
        )
        result = await session.execute(stmt)
        return int(result.scalar_one())

    async def get_by_ids(
        self,
        session: AsyncSession,
        ids: Sequence[UUID],
        filters: DocumentFilters,
    ) -> Sequence[PostModel]:
        """
        Posts whose id is in ids and that pass filters, in no particular order.

        Args:
            session: Async database session
            ids: Candidate post ids
            filters: Publish status, category and tag filters

        Returns:
            Sequence of matching PostModels (unknown ids are skipped)
        """
        if not ids:
            return []
        stmt = select(PostModel).where(
            PostModel.id.in_(list(ids)),
            *self.filter_clauses(None, filters),
        )
        result = await session.execute(stmt)
        return result.scalars().all()


post_crud = PostCRUD()
