"""
Index job CRUD operations.

Provides Create, Read, Update operations for IndexJobModel with
status transitions used by the indexing worker.

Dependencies: sqlalchemy, blogsearch.boundary.db.models.index_job_model
System role: Index job persistence for deferred indexing
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from blogsearch.boundary.db.CRUD.base_crud import BaseCRUD
from blogsearch.boundary.db.models.index_job_model import IndexJobModel, IndexJobStatus


class IndexJobCRUD(BaseCRUD[IndexJobModel]):
    """
    CRUD operations for IndexJobModel.

    Extends BaseCRUD with job-specific queries for task correlation
    and status tracking.
    """

    def __init__(self) -> None:
        super().__init__(IndexJobModel)

    async def get_by_task_id(
        self,
        session: AsyncSession,
        task_id: str,
    ) -> IndexJobModel | None:
        """Retrieve job by Celery task id."""
        stmt = select(IndexJobModel).where(IndexJobModel.task_id == task_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_document_id(
        self,
        session: AsyncSession,
        document_id: UUID,
        limit: int | None = None,
    ) -> Sequence[IndexJobModel]:
        """
        Jobs for one post, newest first.

        Args:
            session: Async database session
            document_id: Post id
            limit: Maximum number of jobs to return

        Returns:
            Sequence of IndexJobModels
        """
        stmt = (
            select(IndexJobModel)
            .where(IndexJobModel.document_id == document_id)
            .order_by(IndexJobModel.created_at.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_by_status(
        self,
        session: AsyncSession,
        status: IndexJobStatus,
        limit: int | None = None,
    ) -> Sequence[IndexJobModel]:
        stmt = select(IndexJobModel).where(IndexJobModel.status == status)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def set_task_id(
        self,
        session: AsyncSession,
        id: UUID,
        task_id: str,
    ) -> IndexJobModel | None:
        return await self.update_by_id(session, id, task_id=task_id)

    async def mark_running(self, session: AsyncSession, id: UUID) -> IndexJobModel | None:
        """
        Mark job as running and count the attempt.

        Args:
            session: Async database session
            id: Job UUID

        Returns:
            Updated IndexJobModel if found, None otherwise
        """
        return await self.update_by_id(
            session,
            id,
            status=IndexJobStatus.RUNNING,
            attempts=IndexJobModel.attempts + 1,
        )

    async def mark_completed(
        self,
        session: AsyncSession,
        id: UUID,
        result_data: dict,
    ) -> IndexJobModel | None:
        """Mark job as completed with its indexing summary."""
        return await self.update_by_id(
            session, id, status=IndexJobStatus.COMPLETED, result=result_data
        )

    async def mark_failed(
        self,
        session: AsyncSession,
        id: UUID,
        error_details: dict,
    ) -> IndexJobModel | None:
        """
        Mark job as failed with error details.

        Args:
            session: Async database session
            id: Job UUID
            error_details: Error information dict

        Returns:
            Updated IndexJobModel if found, None otherwise
        """
        return await self.update_by_id(
            session, id, status=IndexJobStatus.FAILED, result=error_details
        )


index_job_crud = IndexJobCRUD()
