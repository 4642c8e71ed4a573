"""
Embedding pipeline.

Turns a document into vector records: one title record plus either one
content record (short bodies) or an ordered run of chunk records (long
bodies). The pipeline is the only writer of the vector index.

Dependencies: blogsearch.core.indexing, blogsearch.boundary.vdb
System role: Document indexing for semantic search
"""

import asyncio
import enum
import logging
import time
import uuid
from dataclasses import asdict, dataclass

from blogsearch.boundary.vdb.base import VectorIndex
from blogsearch.configs.indexing import IndexingSettings
from blogsearch.core.exceptions import (
    BlogSearchException,
    IndexingFailedError,
    VectorStoreError,
)
from blogsearch.core.indexing.chunker import Chunker
from blogsearch.core.indexing.embedding_client import EmbeddingClient
from blogsearch.core.indexing.token_counter import TokenCounter
from blogsearch.models.document import Document
from blogsearch.models.embedding import ContentType, EmbeddingRecord

logger = logging.getLogger(__name__)


class IndexingMode(str, enum.Enum):
    """How a document body was embedded."""

    CONTENT = "content"
    CHUNKED = "chunked"
    TITLE_ONLY = "title_only"


@dataclass
class IndexingResult:
    """Summary of one index_document call."""

    document_id: uuid.UUID
    mode: IndexingMode
    record_count: int
    chunk_count: int
    body_tokens: int
    processing_time_sec: float

    def to_dict(self) -> dict:
        data = asdict(self)
        data["document_id"] = str(self.document_id)
        data["mode"] = self.mode.value
        return data


class EmbeddingPipeline:
    """
    Index, reindex and remove documents in the vector index.

    Body handling:
        - blank body: title record only
        - body within max_tokens: one content record
        - longer body: chunk records cut by the Chunker
    """

    def __init__(
        self,
        token_counter: TokenCounter,
        chunker: Chunker,
        embedding_client: EmbeddingClient,
        vector_index: VectorIndex,
        config: IndexingSettings,
    ) -> None:
        self._counter = token_counter
        self._chunker = chunker
        self._client = embedding_client
        self._index = vector_index
        self._config = config

    def _record(
        self,
        doc: Document,
        content_type: ContentType,
        text: str,
        vector: list[float],
        token_count: int,
        chunk_index: int | None = None,
    ) -> EmbeddingRecord:
        return EmbeddingRecord(
            document_id=doc.id,
            content_type=content_type,
            text_fragment=text,
            vector=vector,
            chunk_index=chunk_index,
            token_count=token_count,
        )

    async def index_document(self, doc: Document) -> IndexingResult:
        """
        Write title and body embeddings for a document.

        The title and body provider calls run concurrently. Chunked bodies
        use a single batched provider call and a single batch insert.

        Args:
            doc: Document to index

        Returns:
            IndexingResult: Mode, record and token counts

        Raises:
            IndexingFailedError: On provider, vector store or chunking failure
        """
        start_time = time.time()
        document_id = str(doc.id)
        logger.info(f"{__name__}:index_document - START: document_id={document_id}")

        body = doc.body
        stage = "embed"
        try:
            title_tokens = self._counter.count_tokens(doc.title)

            if not body.strip():
                mode = IndexingMode.TITLE_ONLY
                body_tokens = 0
                title_vector = await self._client.embed_document(doc.title)
                body_records: list[EmbeddingRecord] = []

            else:
                body_tokens = self._counter.count_tokens(body)

                if body_tokens <= self._config.max_tokens:
                    mode = IndexingMode.CONTENT
                    title_vector, body_vector = await asyncio.gather(
                        self._client.embed_document(doc.title),
                        self._client.embed_document(body),
                    )
                    body_records = [
                        self._record(doc, ContentType.CONTENT, body, body_vector, body_tokens)
                    ]

                else:
                    mode = IndexingMode.CHUNKED
                    stage = "chunk"
                    chunks = self._chunker.chunk(
                        body,
                        self._config.chunk_max_tokens,
                        self._config.chunk_overlap_tokens,
                    )
                    stage = "embed"
                    title_vector, chunk_vectors = await asyncio.gather(
                        self._client.embed_document(doc.title),
                        self._client.embed_batch([chunk.text for chunk in chunks]),
                    )
                    body_records = [
                        self._record(
                            doc,
                            ContentType.CHUNK,
                            chunk.text,
                            vector,
                            chunk.token_count,
                            chunk_index=chunk.index,
                        )
                        for chunk, vector in zip(chunks, chunk_vectors)
                    ]

            stage = "insert"
            await self._index.insert(
                self._record(doc, ContentType.TITLE, doc.title, title_vector, title_tokens)
            )
            if mode is IndexingMode.CONTENT:
                await self._index.insert(body_records[0])
            elif mode is IndexingMode.CHUNKED:
                await self._index.batch_insert(body_records)

        except BlogSearchException as e:
            logger.error(
                f"{__name__}:index_document - FAILED at {stage}: {type(e).__name__}: {e}",
                extra={"document_id": document_id, "stage": stage},
            )
            raise IndexingFailedError(
                f"Indexing failed at {stage}: {e.message}",
                document_id=document_id,
                stage=stage,
                details={"error_type": type(e).__name__},
            ) from e
        except Exception as e:
            logger.error(
                f"{__name__}:index_document - FAILED at {stage}: {type(e).__name__}: {e}",
                exc_info=True,
                extra={"document_id": document_id, "stage": stage},
            )
            raise IndexingFailedError(
                f"Unexpected error at {stage}: {e}",
                document_id=document_id,
                stage=stage,
                details={"error_type": type(e).__name__},
            ) from e

        result = IndexingResult(
            document_id=doc.id,
            mode=mode,
            record_count=1 + len(body_records),
            chunk_count=len(body_records) if mode is IndexingMode.CHUNKED else 0,
            body_tokens=body_tokens,
            processing_time_sec=round(time.time() - start_time, 3),
        )
        logger.info(
            f"{__name__}:index_document - SUCCESS: mode={mode.value}, records={result.record_count}",
            extra={"document_id": document_id, "body_tokens": body_tokens},
        )
        return result

    async def reindex_document(self, doc: Document) -> IndexingResult:
        """
        Replace a document's records: delete everything, then index again.

        Raises:
            IndexingFailedError: If the delete or the new index fails
        """
        await self.remove_document(doc.id)
        return await self.index_document(doc)

    async def remove_document(self, document_id: uuid.UUID) -> int:
        """
        Delete every record of a document. Unknown ids remove nothing.

        Returns:
            int: Number of records removed

        Raises:
            IndexingFailedError: If the vector store delete fails
        """
        try:
            removed = await self._index.delete_by_document_id(document_id)
        except VectorStoreError as e:
            raise IndexingFailedError(
                f"Removing embeddings failed: {e.message}",
                document_id=str(document_id),
                stage="delete",
            ) from e

        logger.info(
            f"{__name__}:remove_document - Removed {removed} records",
            extra={"document_id": str(document_id)},
        )
        return removed
