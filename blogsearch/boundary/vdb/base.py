"""
Vector index interface.

Both backends (FAISS for dev and tests, pgvector for production) expose
the same async operations so the pipeline and the search orchestrator
never know which one they are talking to.

Dependencies: blogsearch.models.embedding
System role: Vector index contract
"""

import uuid
from abc import ABC, abstractmethod
from typing import Sequence

from blogsearch.models.embedding import EmbeddingRecord, NearestMatch


def clamp_similarity(value: float) -> float:
    """Clamp a cosine score into [0, 1]."""
    return min(max(float(value), 0.0), 1.0)


class VectorIndex(ABC):
    """Durable store of (fragment, vector) rows with cosine retrieval."""

    @abstractmethod
    async def insert(self, record: EmbeddingRecord) -> str:
        """
        Persist one record.

        Returns:
            str: Fragment id of the stored row

        Raises:
            VectorStoreError: If the write fails
        """

    @abstractmethod
    async def batch_insert(self, records: Sequence[EmbeddingRecord]) -> list[str]:
        """
        Persist many records in one write.

        Returns:
            list[str]: Fragment ids in input order

        Raises:
            VectorStoreError: If the write fails
        """

    @abstractmethod
    async def query_nearest(
        self,
        vector: Sequence[float],
        k: int,
        min_similarity: float,
    ) -> list[NearestMatch]:
        """
        Return up to k fragments with cosine similarity >= min_similarity.

        Results are ordered by similarity descending.

        Raises:
            VectorStoreError: If the query fails
        """

    @abstractmethod
    async def delete_by_document_id(self, document_id: uuid.UUID) -> int:
        """
        Remove every fragment of a document.

        Returns:
            int: Number of rows removed (0 for unknown documents)

        Raises:
            VectorStoreError: If the delete fails
        """
