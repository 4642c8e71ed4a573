"""
Post indexing Celery task.

Async task: run_index_job(job_id)
Flow: mark running -> load post -> embed -> write vectors -> mark completed

Each task run builds its own service container so async engines and
connections never cross event loops.

Dependencies: celery, blogsearch.dependencies, blogsearch.application
System role: Async post indexing task
"""

import asyncio
import logging
from uuid import UUID

from blogsearch.core.exceptions import IndexingFailedError
from blogsearch.dependencies import ServiceCache
from blogsearch.workers import celery_app, celery_config

logger = logging.getLogger(__name__)


async def execute_index_job(job_id: UUID) -> dict:
    """
    Run one index job with a fresh service container.

    Args:
        job_id: IndexJobModel id

    Returns:
        dict: Result stored on the job row
    """
    cache = ServiceCache()
    try:
        return await cache.index_job_runner().run(job_id)
    finally:
        await cache.dispose()


@celery_app.task(
    bind=True,
    max_retries=celery_config.task_max_retries,
    autoretry_for=(IndexingFailedError,),
    retry_backoff=celery_config.task_retry_backoff,
    retry_backoff_max=celery_config.task_retry_backoff_max,
    retry_jitter=True,
)
def run_index_job(self, job_id: str) -> dict:
    """
    Index, reindex or remove one post.

    IndexingFailedError triggers a Celery retry with exponential backoff;
    the job row already records the failed attempt.

    Args:
        job_id: IndexJobModel UUID as string

    Returns:
        dict: Indexing summary
    """
    logger.info(
        f"{__name__}:run_index_job - START",
        extra={"job_id": job_id, "retries": self.request.retries},
    )
    return asyncio.run(execute_index_job(UUID(job_id)))
