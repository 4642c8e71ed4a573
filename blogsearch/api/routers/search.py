"""
Search API endpoints.

Routes: GET /search, GET /search/semantic

Search failures come back as HTTP 200 with success=false so clients can
show an error message next to an empty result list.

Dependencies: blogsearch.core.search, blogsearch.models.search
System role: Search HTTP API
"""

from fastapi import APIRouter, Depends, Query

from blogsearch.api.deps import get_search_engine
from blogsearch.core.search.hybrid_search import HybridSearchEngine
from blogsearch.models.search import SearchOptions, SearchResult, VectorSearchOptions

router = APIRouter(prefix="/search", tags=["search"])


@router.get("", response_model=SearchResult)
async def search_posts(
    q: str = Query(default="", max_length=500, description="Free-text query"),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=10, ge=1),
    category: str | None = Query(default=None, description="Category slug"),
    tag: str | None = Query(default=None, description="Tag slug"),
    min_similarity: float | None = Query(default=None, ge=0.0, le=1.0),
    engine: HybridSearchEngine = Depends(get_search_engine),
) -> SearchResult:
    """
    Hybrid search over published posts.

    Substring matches fill the page first; when fewer than 80% of the page
    matches, semantically similar posts are appended.

    Args:
        q: Query text; blank lists the newest posts
        page: 1-based page number
        page_size: Results per page
        category: Optional category slug filter
        tag: Optional tag slug filter
        min_similarity: Overrides the adaptive similarity threshold
        engine: Injected HybridSearchEngine

    Returns:
        SearchResult: Ranked page with lexical/vector counts
    """
    options = SearchOptions(
        page=page,
        page_size=page_size,
        category=category,
        tag=tag,
        only_published=True,
        min_similarity=min_similarity,
    )
    return await engine.search(q, options)


@router.get("/semantic", response_model=SearchResult)
async def semantic_search(
    q: str = Query(..., min_length=1, max_length=500),
    limit: int = Query(default=10, ge=1, le=50),
    page: int = Query(default=1, ge=1),
    min_similarity: float | None = Query(default=None, ge=0.0, le=1.0),
    engine: HybridSearchEngine = Depends(get_search_engine),
) -> SearchResult:
    """Vector-only search over published posts."""
    options = VectorSearchOptions(
        limit=limit,
        page=page,
        min_similarity=min_similarity,
        only_published=True,
    )
    return await engine.vector_only_search(q, options)
