"""
Service container shared by the API and the worker.

Builds the engine, session factory, vector index, embedding client,
pipeline and search engine once per process from configuration.

Dependencies: blogsearch.configs, blogsearch.boundary, blogsearch.core
System role: Composition root
"""

import logging

from blogsearch.configs import get_settings

logger = logging.getLogger(__name__)


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self) -> None:
        self._engine = None
        self._session_factory = None
        self._vector_index = None
        self._embedding_client = None
        self._token_counter = None
        self._document_store = None
        self._embedding_pipeline = None
        self._search_engine = None

    @property
    def engine(self):
        """Get cached async engine."""
        if self._engine is None:
            from blogsearch.boundary.db.connection import get_async_engine

            self._engine = get_async_engine()
        return self._engine

    @property
    def session_factory(self):
        """Get cached async session factory."""
        if self._session_factory is None:
            from blogsearch.boundary.db.connection import get_async_session_factory

            self._session_factory = get_async_session_factory(self.engine)
        return self._session_factory

    @property
    def vector_index(self):
        """Get cached vector index (FAISS or pgvector)."""
        if self._vector_index is None:
            from blogsearch.boundary.vdb.vector_store_factory import get_vector_store

            self._vector_index = get_vector_store(self.session_factory)
        return self._vector_index

    @property
    def embedding_client(self):
        """Get cached embedding client over Gemini embeddings."""
        if self._embedding_client is None:
            from blogsearch.core.indexing.embedding_client import EmbeddingClient
            from blogsearch.core.indexing.embeddings_wrapper import FixedDimensionEmbeddings

            vs_config = get_settings().vector_store
            embeddings = FixedDimensionEmbeddings(
                model=vs_config.embedding_model,
                output_dimensionality=vs_config.embedding_dimension,
            )
            self._embedding_client = EmbeddingClient(
                embeddings,
                dimension=vs_config.embedding_dimension,
            )
        return self._embedding_client

    @property
    def token_counter(self):
        """Get cached token counter."""
        if self._token_counter is None:
            from blogsearch.core.indexing.token_counter import build_token_counter

            self._token_counter = build_token_counter(get_settings().indexing)
        return self._token_counter

    @property
    def document_store(self):
        """Get cached SQL document store."""
        if self._document_store is None:
            from blogsearch.boundary.db.document_store import SqlDocumentStore

            self._document_store = SqlDocumentStore(self.session_factory)
        return self._document_store

    @property
    def embedding_pipeline(self):
        """Get cached embedding pipeline."""
        if self._embedding_pipeline is None:
            from blogsearch.core.indexing.chunker import Chunker
            from blogsearch.core.indexing.embedding_pipeline import EmbeddingPipeline

            self._embedding_pipeline = EmbeddingPipeline(
                token_counter=self.token_counter,
                chunker=Chunker(self.token_counter),
                embedding_client=self.embedding_client,
                vector_index=self.vector_index,
                config=get_settings().indexing,
            )
        return self._embedding_pipeline

    @property
    def search_engine(self):
        """Get cached hybrid search engine."""
        if self._search_engine is None:
            from blogsearch.core.search.hybrid_search import HybridSearchEngine

            self._search_engine = HybridSearchEngine(
                document_store=self.document_store,
                embedding_client=self.embedding_client,
                vector_index=self.vector_index,
                settings=get_settings().search,
            )
        return self._search_engine

    def index_job_runner(self):
        """Build a job runner over the cached pipeline and store."""
        from blogsearch.application.services.indexing_service import IndexJobRunner

        return IndexJobRunner(
            session_factory=self.session_factory,
            document_store=self.document_store,
            pipeline=self.embedding_pipeline,
        )

    async def dispose(self) -> None:
        """Close pooled connections and drop all cached instances."""
        if self._engine is not None:
            await self._engine.dispose()
            logger.info(f"{__name__}:dispose - Engine disposed")
        self.clear()

    def clear(self) -> None:
        """Clear all cached instances."""
        self._engine = None
        self._session_factory = None
        self._vector_index = None
        self._embedding_client = None
        self._token_counter = None
        self._document_store = None
        self._embedding_pipeline = None
        self._search_engine = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache
