"""
Index job API endpoints.

Routes: GET /jobs/{id}

Dependencies: blogsearch.application.services.indexing_service
System role: Index job status HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from blogsearch.api.deps import get_indexing_service
from blogsearch.application.services.indexing_service import IndexingService

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("/{job_id}")
async def get_job_status(
    job_id: UUID,
    indexing_service: IndexingService = Depends(get_indexing_service),
) -> dict:
    """
    Get index job status for polling.

    Args:
        job_id: Job UUID
        indexing_service: Injected IndexingService

    Returns:
        dict: Job status information with:
            - id: Job UUID
            - task_id: Celery task id (null until dispatched)
            - document_id: Post the job acts on
            - action: index, reindex or remove
            - status: pending, running, completed or failed
            - attempts: Worker attempts so far
            - result: Indexing summary or error details
            - created_at / updated_at: ISO timestamps

    Raises:
        HTTPException(404): Job not found

    Example Response:
        {
            "id": "123e4567-e89b-12d3-a456-426614174000",
            "task_id": "5f0c7a7e-1c1b-4c39-9d2b-0c1f6f0b8a11",
            "document_id": "0b7c4c52-6b7a-4d0e-9a57-3c1d7a2f9e10",
            "action": "index",
            "status": "completed",
            "attempts": 1,
            "result": {"action": "index", "mode": "chunked", "record_count": 6},
            "created_at": "2025-01-01T12:00:00+00:00",
            "updated_at": "2025-01-01T12:00:04+00:00"
        }
    """
    try:
        return await indexing_service.get_job_status(job_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
