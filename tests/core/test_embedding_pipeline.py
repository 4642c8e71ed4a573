"""
Tests for EmbeddingPipeline.

Runs the real chunker and FAISS index with deterministic keyword
embeddings; failure paths use mocked collaborators.

System role: Verification of title/content/chunk record invariants
"""

import math
import uuid
from datetime import datetime
from unittest.mock import AsyncMock

import pytest

from blogsearch.boundary.vdb.base import VectorIndex
from blogsearch.boundary.vdb.faiss_index import FaissVectorIndex
from blogsearch.core.exceptions import IndexingFailedError, ProviderError, VectorStoreError
from blogsearch.core.indexing.chunker import Chunker
from blogsearch.core.indexing.embedding_client import EmbeddingClient
from blogsearch.core.indexing.embedding_pipeline import EmbeddingPipeline, IndexingMode
from blogsearch.models.document import Document
from blogsearch.models.embedding import ContentType


def make_doc(title: str = "机器学习入门", body: str = "机器学习 short body") -> Document:
    return Document(
        id=uuid.uuid4(),
        title=title,
        body=body,
        published=True,
        created_at=datetime(2024, 1, 1),
    )


def long_body(n: int = 100) -> str:
    return " ".join(f"word{i}" for i in range(n))


def kinds(index: FaissVectorIndex, doc: Document) -> list[ContentType]:
    return sorted(kind for kind, _ in index.fragments_for(doc.id))


class TestIndexDocument:
    """Test suite for index_document modes."""

    async def test_short_body_writes_title_and_content(
        self, pipeline: EmbeddingPipeline, faiss_index: FaissVectorIndex
    ) -> None:
        # Arrange
        doc = make_doc()

        # Act
        result = await pipeline.index_document(doc)

        # Assert
        assert result.mode is IndexingMode.CONTENT
        assert result.record_count == 2
        assert result.chunk_count == 0
        assert kinds(faiss_index, doc) == sorted([ContentType.TITLE, ContentType.CONTENT])

    async def test_long_body_writes_title_and_chunks(
        self,
        pipeline: EmbeddingPipeline,
        faiss_index: FaissVectorIndex,
        keyword_embeddings,
    ) -> None:
        # Arrange: 100 tokens against max_tokens=40, chunks of 16 with overlap 4
        doc = make_doc(body=long_body(100))
        expected_chunks = math.ceil((100 - 4) / (16 - 4))

        # Act
        result = await pipeline.index_document(doc)

        # Assert
        assert result.mode is IndexingMode.CHUNKED
        assert result.chunk_count == expected_chunks
        assert result.body_tokens == 100
        fragments = faiss_index.fragments_for(doc.id)
        assert [kind for kind, _ in fragments].count(ContentType.TITLE) == 1
        assert ContentType.CONTENT not in [kind for kind, _ in fragments]
        chunk_indexes = sorted(index for kind, index in fragments if kind is ContentType.CHUNK)
        assert chunk_indexes == list(range(expected_chunks))
        # One batched provider call for all chunks plus the title call
        batches = sorted(keyword_embeddings.document_calls, key=len)
        assert batches[0] == [doc.title]
        assert len(batches[1]) == expected_chunks
        assert keyword_embeddings.query_calls == []

    async def test_body_at_limit_is_not_chunked(
        self, pipeline: EmbeddingPipeline, faiss_index: FaissVectorIndex
    ) -> None:
        doc = make_doc(body=long_body(40))

        result = await pipeline.index_document(doc)

        assert result.mode is IndexingMode.CONTENT
        assert kinds(faiss_index, doc) == sorted([ContentType.TITLE, ContentType.CONTENT])

    async def test_blank_body_writes_title_only(
        self, pipeline: EmbeddingPipeline, faiss_index: FaissVectorIndex
    ) -> None:
        doc = make_doc(body="  \n ")

        result = await pipeline.index_document(doc)

        assert result.mode is IndexingMode.TITLE_ONLY
        assert result.record_count == 1
        assert kinds(faiss_index, doc) == [ContentType.TITLE]

    async def test_title_and_content_use_document_embeddings(
        self, pipeline: EmbeddingPipeline, keyword_embeddings
    ) -> None:
        doc = make_doc(title="React 指南", body="前端 frontend body")

        await pipeline.index_document(doc)

        assert sorted(keyword_embeddings.document_calls) == [["React 指南"], ["前端 frontend body"]]
        assert keyword_embeddings.query_calls == []

    async def test_title_only_uses_document_embeddings(
        self, pipeline: EmbeddingPipeline, keyword_embeddings
    ) -> None:
        await pipeline.index_document(make_doc(title="cooking notes", body="  "))

        assert keyword_embeddings.document_calls == [["cooking notes"]]
        assert keyword_embeddings.query_calls == []


class TestReindexAndRemove:
    """Test suite for reindex_document and remove_document."""

    async def test_reindex_long_then_short_leaves_title_and_content(
        self, pipeline: EmbeddingPipeline, faiss_index: FaissVectorIndex
    ) -> None:
        # Arrange
        doc = make_doc(body=long_body(100))
        await pipeline.index_document(doc)
        shorter = doc.model_copy(update={"body": "now a short body"})

        # Act
        result = await pipeline.reindex_document(shorter)

        # Assert
        assert result.mode is IndexingMode.CONTENT
        assert kinds(faiss_index, doc) == sorted([ContentType.TITLE, ContentType.CONTENT])

    async def test_remove_document_deletes_all_records(
        self, pipeline: EmbeddingPipeline, faiss_index: FaissVectorIndex
    ) -> None:
        doc = make_doc(body=long_body(100))
        await pipeline.index_document(doc)

        removed = await pipeline.remove_document(doc.id)

        assert removed > 2
        assert faiss_index.fragments_for(doc.id) == []

    async def test_remove_unknown_document_returns_zero(self, pipeline: EmbeddingPipeline) -> None:
        assert await pipeline.remove_document(uuid.uuid4()) == 0

    async def test_other_documents_untouched(
        self, pipeline: EmbeddingPipeline, faiss_index: FaissVectorIndex
    ) -> None:
        keep, drop = make_doc(), make_doc()
        await pipeline.index_document(keep)
        await pipeline.index_document(drop)

        await pipeline.remove_document(drop.id)

        assert len(faiss_index.fragments_for(keep.id)) == 2


class TestPipelineFailures:
    """Test suite for error wrapping."""

    @pytest.fixture
    def failing_client(self) -> AsyncMock:
        client = AsyncMock(spec=EmbeddingClient)
        client.embed_document.side_effect = ProviderError("rate limited", provider="mock")
        return client

    async def test_provider_error_becomes_indexing_failed(
        self, regex_counter, failing_client, faiss_index, indexing_settings
    ) -> None:
        # Arrange
        pipeline = EmbeddingPipeline(
            regex_counter, Chunker(regex_counter), failing_client, faiss_index, indexing_settings
        )
        doc = make_doc()

        # Act & Assert
        with pytest.raises(IndexingFailedError) as exc_info:
            await pipeline.index_document(doc)

        assert exc_info.value.details["document_id"] == str(doc.id)
        assert exc_info.value.details["stage"] == "embed"
        assert isinstance(exc_info.value.__cause__, ProviderError)
        assert faiss_index.size == 0

    async def test_vector_store_error_becomes_indexing_failed(
        self, regex_counter, embedding_client, indexing_settings
    ) -> None:
        # Arrange
        index = AsyncMock(spec=VectorIndex)
        index.insert.side_effect = VectorStoreError("disk full", operation="insert")
        pipeline = EmbeddingPipeline(
            regex_counter, Chunker(regex_counter), embedding_client, index, indexing_settings
        )

        # Act & Assert
        with pytest.raises(IndexingFailedError) as exc_info:
            await pipeline.index_document(make_doc())

        assert exc_info.value.details["stage"] == "insert"

    async def test_delete_failure_becomes_indexing_failed(
        self, regex_counter, embedding_client, indexing_settings
    ) -> None:
        index = AsyncMock(spec=VectorIndex)
        index.delete_by_document_id.side_effect = VectorStoreError("locked", operation="delete")
        pipeline = EmbeddingPipeline(
            regex_counter, Chunker(regex_counter), embedding_client, index, indexing_settings
        )

        with pytest.raises(IndexingFailedError) as exc_info:
            await pipeline.remove_document(uuid.uuid4())

        assert exc_info.value.details["stage"] == "delete"
