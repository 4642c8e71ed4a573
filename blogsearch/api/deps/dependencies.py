"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: blogsearch.configs, blogsearch.application, blogsearch.boundary
System role: DI container for service injection
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from blogsearch.application.services.indexing_service import IndexingService
from blogsearch.boundary.db import get_async_db
from blogsearch.configs import Settings, get_settings
from blogsearch.core.search.hybrid_search import HybridSearchEngine
from blogsearch.dependencies import ServiceCache, get_service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_search_engine(
    cache: ServiceCache = Depends(get_service_cache),
) -> HybridSearchEngine:
    """
    Get the process-wide hybrid search engine.

    Args:
        cache: Service cache (injected via Depends)

    Returns:
        HybridSearchEngine: Search orchestrator
    """
    return cache.search_engine


def get_indexing_service(db: AsyncSession = Depends(get_async_db)) -> IndexingService:
    """
    Get indexing service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        IndexingService: Index job service
    """
    return IndexingService(db=db)
