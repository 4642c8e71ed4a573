"""
pgvector vector index for production.

Stores fragments in the post_embeddings table and answers cosine
nearest-neighbour queries with the pgvector <=> operator. Writes retry
on transient connection errors with exponential backoff.

Dependencies: sqlalchemy, pgvector, tenacity
System role: Production vector store
"""

import logging
import uuid
from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from blogsearch.boundary.db.models.embedding_model import PostEmbeddingModel
from blogsearch.boundary.vdb.base import VectorIndex, clamp_similarity
from blogsearch.core.exceptions import VectorStoreError
from blogsearch.models.embedding import EmbeddingRecord, NearestMatch

logger = logging.getLogger(__name__)

MAX_WRITE_ATTEMPTS = 3


class PgVectorIndex(VectorIndex):
    """
    Cosine index over the post_embeddings table.

    Every call opens its own session; each write is one transaction.
    """

    def __init__(self, session_factory: async_sessionmaker, dimension: int) -> None:
        """
        Args:
            session_factory: Async session factory bound to PostgreSQL
            dimension: Expected vector dimension
        """
        self._session_factory = session_factory
        self.dimension = dimension

    def _check_dimension(self, vectors: Sequence[Sequence[float]], operation: str) -> None:
        for vector in vectors:
            if len(vector) != self.dimension:
                raise VectorStoreError(
                    "Vector dimension mismatch",
                    operation=operation,
                    details={"expected": self.dimension, "received": len(vector)},
                )

    @retry(
        retry=retry_if_exception_type(OperationalError),
        stop=stop_after_attempt(MAX_WRITE_ATTEMPTS),
        wait=wait_exponential_jitter(initial=0.5, max=5, jitter=1),
        before_sleep=lambda retry_state: logger.warning(
            f"{__name__}:_write_rows - Retry {retry_state.attempt_number}/{MAX_WRITE_ATTEMPTS} "
            f"after transient database error"
        ),
        reraise=True,
    )
    async def _write_rows(self, records: Sequence[EmbeddingRecord]) -> list[str]:
        """Insert records in one transaction with retry on OperationalError."""
        rows = [
            PostEmbeddingModel(
                id=uuid.uuid4(),
                post_id=record.document_id,
                content_type=record.content_type,
                text_fragment=record.text_fragment,
                embedding=record.vector,
                chunk_index=record.chunk_index,
                token_count=record.token_count,
            )
            for record in records
        ]
        async with self._session_factory() as session:
            session.add_all(rows)
            await session.commit()
        return [str(row.id) for row in rows]

    async def insert(self, record: EmbeddingRecord) -> str:
        fragment_ids = await self.batch_insert([record])
        return fragment_ids[0]

    async def batch_insert(self, records: Sequence[EmbeddingRecord]) -> list[str]:
        if not records:
            return []
        self._check_dimension([record.vector for record in records], "insert")
        try:
            fragment_ids = await self._write_rows(records)
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:batch_insert - {type(e).__name__}: {e}")
            raise VectorStoreError(
                f"pgvector insert failed: {e}",
                operation="insert",
                details={"record_count": len(records)},
            ) from e

        logger.debug(f"{__name__}:batch_insert - Inserted {len(fragment_ids)} fragments")
        return fragment_ids

    def build_nearest_statement(
        self,
        vector: Sequence[float],
        k: int,
        min_similarity: float,
    ):
        """SELECT for the k nearest fragments at or above min_similarity."""
        distance = PostEmbeddingModel.embedding.cosine_distance(list(vector))
        return (
            select(PostEmbeddingModel, (1 - distance).label("similarity"))
            .where(distance <= 1 - min_similarity)
            .order_by(distance)
            .limit(k)
        )

    async def query_nearest(
        self,
        vector: Sequence[float],
        k: int,
        min_similarity: float,
    ) -> list[NearestMatch]:
        if k <= 0:
            return []
        self._check_dimension([vector], "query")
        stmt = self.build_nearest_statement(vector, k, min_similarity)
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                rows = result.all()
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:query_nearest - {type(e).__name__}: {e}")
            raise VectorStoreError(f"pgvector query failed: {e}", operation="query") from e

        return [
            NearestMatch(
                fragment_id=str(row.id),
                document_id=row.post_id,
                similarity=clamp_similarity(similarity),
                text_fragment=row.text_fragment,
                content_type=row.content_type,
                chunk_index=row.chunk_index,
            )
            for row, similarity in rows
        ]

    async def delete_by_document_id(self, document_id: uuid.UUID) -> int:
        stmt = delete(PostEmbeddingModel).where(PostEmbeddingModel.post_id == document_id)
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                await session.commit()
        except SQLAlchemyError as e:
            raise VectorStoreError(
                f"pgvector delete failed: {e}",
                operation="delete",
                details={"document_id": str(document_id)},
            ) from e

        removed = result.rowcount or 0
        logger.info(
            "Deleted document vectors",
            extra={"document_id": str(document_id), "fragment_count": removed},
        )
        return removed
