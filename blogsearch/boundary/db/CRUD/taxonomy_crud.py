"""
Category and tag CRUD operations.

Dependencies: sqlalchemy, blogsearch.boundary.db.models
System role: Taxonomy persistence for post filters
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from blogsearch.boundary.db.CRUD.base_crud import BaseCRUD, ModelT
from blogsearch.boundary.db.models.post_model import CategoryModel, TagModel


class _SlugCRUD(BaseCRUD[ModelT]):
    """Lookup and idempotent creation by slug."""

    async def get_by_slug(self, session: AsyncSession, slug: str) -> ModelT | None:
        stmt = select(self.model).where(self.model.slug == slug)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_or_create(
        self,
        session: AsyncSession,
        slug: str,
        name: str | None = None,
    ) -> ModelT:
        """
        Return the row with slug, creating it when missing.

        Args:
            session: Async database session
            slug: Unique slug
            name: Display name for a new row (defaults to slug)

        Returns:
            Existing or newly flushed model instance
        """
        existing = await self.get_by_slug(session, slug)
        if existing is not None:
            return existing
        return await self.create(session, slug=slug, name=name or slug)


class CategoryCRUD(_SlugCRUD[CategoryModel]):
    def __init__(self) -> None:
        super().__init__(CategoryModel)


class TagCRUD(_SlugCRUD[TagModel]):
    def __init__(self) -> None:
        super().__init__(TagModel)


category_crud = CategoryCRUD()
tag_crud = TagCRUD()
