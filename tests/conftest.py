"""
Shared test fixtures and configuration for entire test suite.

Provides: SQLite-backed session factory, seeded posts, deterministic
keyword embeddings, FAISS index and small indexing settings.
Dependencies: pytest, pytest-asyncio, sqlalchemy, aiosqlite, langchain_core
System role: Test infrastructure and fixture management
"""

import uuid
from datetime import datetime, timedelta
from typing import Sequence

import pytest
from langchain_core.embeddings import Embeddings

from blogsearch.boundary.db.connection import get_async_session_factory
from blogsearch.boundary.db.create_tables import create_all_tables
from blogsearch.boundary.db.CRUD import category_crud, post_crud, tag_crud
from blogsearch.boundary.vdb.faiss_index import FaissVectorIndex
from blogsearch.configs.indexing import IndexingSettings
from blogsearch.configs.search import SearchSettings
from blogsearch.core.indexing.chunker import Chunker
from blogsearch.core.indexing.embedding_client import EmbeddingClient
from blogsearch.core.indexing.embedding_pipeline import EmbeddingPipeline
from blogsearch.core.indexing.token_counter import RegexTokenCounter

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


class KeywordEmbeddings(Embeddings):
    """
    Deterministic embeddings: one dimension per topic keyword group.

    A text's vector counts keyword hits per topic plus a small constant
    component, so texts on the same topic have cosine similarity near 1
    and unrelated texts near 0.
    """

    TOPICS: tuple[tuple[str, ...], ...] = (
        ("machine learning", "机器学习", "深度学习", "deep learning", "neural", "artificial intelligence", "人工智能"),
        ("react", "javascript", "前端", "frontend"),
        ("摇床", "shaker", "实验室", "laboratory"),
        ("cooking", "recipe", "烹饪"),
    )
    dimension = len(TOPICS) + 1

    def __init__(self) -> None:
        self.query_calls: list[str] = []
        self.document_calls: list[list[str]] = []

    def vector_for(self, text: str) -> list[float]:
        lowered = text.lower()
        vector = [float(sum(lowered.count(keyword) for keyword in topic)) for topic in self.TOPICS]
        vector.append(0.1)
        return vector

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        self.document_calls.append(list(texts))
        return [self.vector_for(text) for text in texts]

    def embed_query(self, text: str) -> list[float]:
        self.query_calls.append(text)
        return self.vector_for(text)


@pytest.fixture
def keyword_embeddings() -> KeywordEmbeddings:
    """Provide deterministic keyword embeddings."""
    return KeywordEmbeddings()


@pytest.fixture
def embedding_client(keyword_embeddings: KeywordEmbeddings) -> EmbeddingClient:
    """Provide EmbeddingClient over keyword embeddings."""
    return EmbeddingClient(keyword_embeddings, dimension=KeywordEmbeddings.dimension)


@pytest.fixture
def regex_counter() -> RegexTokenCounter:
    return RegexTokenCounter()


@pytest.fixture
def indexing_settings() -> IndexingSettings:
    """Small token limits so short test bodies exercise chunking."""
    return IndexingSettings(
        tokenizer="regex",
        max_tokens=40,
        chunk_max_tokens=16,
        chunk_overlap_tokens=4,
    )


@pytest.fixture
def search_settings() -> SearchSettings:
    return SearchSettings(timeout_seconds=5.0)


@pytest.fixture
def faiss_index() -> FaissVectorIndex:
    """Provide in-memory FAISS index sized for keyword embeddings."""
    return FaissVectorIndex(dimension=KeywordEmbeddings.dimension)


@pytest.fixture
def pipeline(
    regex_counter: RegexTokenCounter,
    embedding_client: EmbeddingClient,
    faiss_index: FaissVectorIndex,
    indexing_settings: IndexingSettings,
) -> EmbeddingPipeline:
    """Provide EmbeddingPipeline wired to FAISS and keyword embeddings."""
    return EmbeddingPipeline(
        token_counter=regex_counter,
        chunker=Chunker(regex_counter),
        embedding_client=embedding_client,
        vector_index=faiss_index,
        config=indexing_settings,
    )


@pytest.fixture
async def session_factory(tmp_path):
    """
    Create a file-backed SQLite database with all tables.

    A file database lets concurrent sessions see the same data.

    Yields:
        async_sessionmaker: Session factory bound to the test database
    """
    from sqlalchemy.ext.asyncio import create_async_engine

    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'blog.db'}")
    await create_all_tables(engine)

    yield get_async_session_factory(engine)

    await engine.dispose()


async def add_post(
    session_factory,
    title: str,
    content: str = "",
    brief: str | None = None,
    published: bool = True,
    category: str | None = None,
    tags: Sequence[str] = (),
    age_days: int = 0,
) -> uuid.UUID:
    """
    Insert one post; larger age_days means older.

    Returns:
        UUID: New post id
    """
    stamp = BASE_TIME - timedelta(days=age_days)
    async with session_factory() as session:
        category_row = await category_crud.get_or_create(session, category) if category else None
        tag_rows = [await tag_crud.get_or_create(session, slug) for slug in tags]
        post = await post_crud.create(
            session,
            title=title,
            content=content,
            brief=brief,
            published=published,
            published_at=stamp if published else None,
            created_at=stamp,
            category=category_row,
            tags=tag_rows,
        )
        await session.commit()
        return post.id


@pytest.fixture
def post_factory(session_factory):
    """Provide add_post bound to the test database."""

    async def factory(title: str, **kwargs) -> uuid.UUID:
        return await add_post(session_factory, title, **kwargs)

    return factory
