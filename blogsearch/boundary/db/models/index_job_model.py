"""
Index job ORM model.

Tracks deferred indexing work dispatched to Celery so failures stay
observable after the post write has returned.

Dependencies: sqlalchemy, blogsearch.boundary.db.base
System role: Async job tracking for background indexing
"""

import enum
import uuid

from sqlalchemy import JSON, Enum, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from blogsearch.boundary.db.base import Base, TimestampMixin, UUIDMixin


class IndexAction(str, enum.Enum):
    """
    Work an index job performs.

    INDEX: Embed a newly created post
    REINDEX: Drop existing fragments and embed again
    REMOVE: Drop all fragments of a post
    """

    INDEX = "index"
    REINDEX = "reindex"
    REMOVE = "remove"


class IndexJobStatus(str, enum.Enum):
    """
    Index job execution states.

    PENDING: Row created, task not yet picked up (or dispatch failed)
    RUNNING: Worker processing the job
    COMPLETED: Succeeded; result holds the indexing summary
    FAILED: Last attempt failed; result holds error details
    """

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class IndexJobModel(Base, UUIDMixin, TimestampMixin):
    """
    Index job ORM model linking a Celery task to one post.

    Attributes:
        id: UUID primary key (auto-generated)
        task_id: Celery task id, set once dispatch succeeds
        document_id: Post the job acts on (no FK; REMOVE outlives the post)
        action: IndexAction
        status: IndexJobStatus
        attempts: Number of times a worker started this job
        result: Indexing summary on success, error details on failure
        created_at: Job creation timestamp (UTC)
        updated_at: Last status update timestamp (UTC)
    """

    __tablename__ = "index_jobs"

    task_id: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        unique=True,
        doc="Celery task ID",
    )

    document_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        nullable=False,
        index=True,
    )

    action: Mapped[IndexAction] = mapped_column(
        Enum(IndexAction, native_enum=False),
        nullable=False,
    )

    status: Mapped[IndexJobStatus] = mapped_column(
        Enum(IndexJobStatus, native_enum=False),
        nullable=False,
        default=IndexJobStatus.PENDING,
    )

    attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    result: Mapped[dict] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        doc="Job results or error details",
    )
