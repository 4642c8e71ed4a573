"""
Vector store factory for selecting between FAISS (dev) and pgvector (prod).

Depends on VECTOR_STORE_STORE_TYPE environment variable.
Provides consistent interface regardless of underlying implementation.

Dependencies: blogsearch.boundary.vdb, blogsearch.configs
System role: Vector store instantiation and selection
"""

import logging

from sqlalchemy.ext.asyncio import async_sessionmaker

from blogsearch.boundary.vdb.base import VectorIndex
from blogsearch.boundary.vdb.faiss_index import FaissVectorIndex
from blogsearch.boundary.vdb.pgvector_index import PgVectorIndex
from blogsearch.configs import get_settings

logger = logging.getLogger(__name__)


def get_vector_store(session_factory: async_sessionmaker | None = None) -> VectorIndex:
    """
    Factory function to get vector store based on environment configuration.

    Args:
        session_factory: Required for pgvector; ignored for FAISS

    Returns:
        VectorIndex: FaissVectorIndex or PgVectorIndex

    Raises:
        ValueError: If store_type is invalid or pgvector has no session factory
    """
    settings = get_settings()
    store_type = settings.vector_store.store_type.lower()
    dimension = settings.vector_store.embedding_dimension

    if store_type == "faiss":
        logger.info(
            f"{__name__}:get_vector_store - Creating FAISS vector store (local dev mode)"
        )
        return FaissVectorIndex(
            dimension=dimension,
            index_dir=settings.vector_store.index_dir,
        )

    elif store_type == "pgvector":
        if session_factory is None:
            raise ValueError("pgvector store requires a database session factory")
        logger.info(f"{__name__}:get_vector_store - Creating pgvector store (production mode)")
        return PgVectorIndex(session_factory=session_factory, dimension=dimension)

    else:
        raise ValueError(
            f"Invalid VECTOR_STORE_STORE_TYPE: {store_type}. "
            f"Must be 'faiss' (dev) or 'pgvector' (production)."
        )
