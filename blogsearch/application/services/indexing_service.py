"""
Indexing service orchestrator.

Creates index job rows, hands them to the Celery worker, and runs them
inside the worker. A failed or undeliverable job never affects the post
write that caused it; the job row records what happened.

Dependencies: blogsearch.boundary.db, blogsearch.core.indexing, blogsearch.workers
System role: Deferred indexing orchestration
"""

import logging
from typing import Callable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from blogsearch.boundary.db.CRUD.index_job_crud import index_job_crud
from blogsearch.boundary.db.document_store import DocumentStore
from blogsearch.boundary.db.models.index_job_model import IndexAction, IndexJobModel, IndexJobStatus
from blogsearch.core.exceptions import DocumentStoreError, IndexingFailedError
from blogsearch.core.indexing.embedding_pipeline import EmbeddingPipeline
from blogsearch.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

Dispatcher = Callable[[str], str | None]


def dispatch_to_celery(job_id: str) -> str:
    """Enqueue run_index_job and return the Celery task id."""
    from blogsearch.workers.tasks.indexing import run_index_job

    return run_index_job.delay(job_id).id


class IndexingService:
    """
    Index job scheduling and status reporting.

    Shares the caller's session; schedule() commits it.
    """

    def __init__(self, db: AsyncSession, dispatcher: Dispatcher | None = None) -> None:
        """
        Args:
            db: AsyncSession for database operations
            dispatcher: Callable that enqueues a job id and returns a task id
        """
        self.db = db
        self._dispatch = dispatcher or dispatch_to_celery

    async def schedule(self, document_id: UUID, action: IndexAction) -> UUID:
        """
        Record an index job and dispatch it to the worker.

        The job row is committed before dispatch so the worker can always
        find it. Dispatch errors are logged and leave the job PENDING.

        Args:
            document_id: Post to act on
            action: INDEX, REINDEX or REMOVE

        Returns:
            UUID: Created job ID
        """
        job = await index_job_crud.create(
            self.db,
            document_id=document_id,
            action=action,
            status=IndexJobStatus.PENDING,
            attempts=0,
            result={},
        )
        await self.db.commit()

        try:
            task_id = self._dispatch(str(job.id))
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:schedule - Dispatch failed, job left pending",
                e,
                job_id=str(job.id),
                document_id=str(document_id),
                action=action.value,
            )
            return job.id

        if task_id:
            await index_job_crud.set_task_id(self.db, job.id, task_id)
            await self.db.commit()

        logger.info(
            f"{__name__}:schedule - Dispatched {action.value} job",
            extra={"job_id": str(job.id), "task_id": task_id, "document_id": str(document_id)},
        )
        return job.id

    async def get_job_status(self, job_id: UUID) -> dict:
        """
        Get job status details for polling.

        Args:
            job_id: Job UUID

        Returns:
            dict: Job status information

        Raises:
            ValueError: If job doesn't exist
        """
        job = await index_job_crud.get_by_id(self.db, job_id)
        if not job:
            raise ValueError(f"Job {job_id} does not exist")

        return {
            "id": str(job.id),
            "task_id": job.task_id,
            "document_id": str(job.document_id),
            "action": job.action.value,
            "status": job.status.value,
            "attempts": job.attempts,
            "result": job.result,
            "created_at": job.created_at.isoformat(),
            "updated_at": job.updated_at.isoformat(),
        }


class IndexJobRunner:
    """
    Executes index jobs against the embedding pipeline.

    Each status transition commits in its own session so a failure in the
    pipeline cannot roll back the RUNNING or FAILED marks.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        document_store: DocumentStore,
        pipeline: EmbeddingPipeline,
    ) -> None:
        self._session_factory = session_factory
        self._store = document_store
        self._pipeline = pipeline

    async def run(self, job_id: UUID) -> dict:
        """
        Run one job to completion.

        Args:
            job_id: IndexJobModel id

        Returns:
            dict: Result stored on the job row

        Raises:
            ValueError: If the job doesn't exist
            IndexingFailedError: After marking the job FAILED, so the
                worker can retry
        """
        async with self._session_factory() as session:
            job = await index_job_crud.mark_running(session, job_id)
            await session.commit()
        if job is None:
            raise ValueError(f"Job {job_id} does not exist")

        logger.info(
            f"{__name__}:run - START: {job.action.value} attempt {job.attempts}",
            extra={"job_id": str(job_id), "document_id": str(job.document_id)},
        )

        try:
            result = await self._execute(job)
        except IndexingFailedError as e:
            async with self._session_factory() as session:
                await index_job_crud.mark_failed(
                    session,
                    job_id,
                    {
                        "error": e.message,
                        "details": {key: str(val) for key, val in e.details.items()},
                        "attempt": job.attempts,
                    },
                )
                await session.commit()
            raise

        async with self._session_factory() as session:
            await index_job_crud.mark_completed(session, job_id, result)
            await session.commit()

        logger.info(
            f"{__name__}:run - SUCCESS",
            extra={"job_id": str(job_id), "document_id": str(job.document_id)},
        )
        return result

    async def _execute(self, job: IndexJobModel) -> dict:
        if job.action is IndexAction.REMOVE:
            removed = await self._pipeline.remove_document(job.document_id)
            return {"action": job.action.value, "removed": removed}

        try:
            doc = await self._store.get_by_id(job.document_id)
        except DocumentStoreError as e:
            raise IndexingFailedError(
                f"Loading post failed: {e.message}",
                document_id=str(job.document_id),
                stage="load",
            ) from e

        if doc is None:
            removed = await self._pipeline.remove_document(job.document_id)
            return {
                "action": job.action.value,
                "skipped": True,
                "reason": "document not found",
                "removed": removed,
            }

        # A retried INDEX may have left partial records behind
        if job.action is IndexAction.REINDEX or job.attempts > 1:
            outcome = await self._pipeline.reindex_document(doc)
        else:
            outcome = await self._pipeline.index_document(doc)
        return {"action": job.action.value, **outcome.to_dict()}
