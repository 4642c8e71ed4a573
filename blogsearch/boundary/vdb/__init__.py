"""
Vector index boundary: interface, FAISS and pgvector backends, factory.
"""

from blogsearch.boundary.vdb.base import VectorIndex, clamp_similarity
from blogsearch.boundary.vdb.faiss_index import FaissVectorIndex
from blogsearch.boundary.vdb.pgvector_index import PgVectorIndex
from blogsearch.boundary.vdb.vector_store_factory import get_vector_store

__all__ = [
    "VectorIndex",
    "clamp_similarity",
    "FaissVectorIndex",
    "PgVectorIndex",
    "get_vector_store",
]
