"""
Hybrid search orchestrator.

Runs the lexical branch first and only falls back to semantic retrieval
when the substring page comes back thin. Vector hits fill the remainder
of the page after lexical hits.

Dependencies: blogsearch.boundary (document store, vector index),
    blogsearch.core.indexing.embedding_client, blogsearch.core.search
System role: Query path for blog search
"""

import asyncio
import logging
import math
from typing import Sequence

from blogsearch.boundary.db.document_store import DocumentStore
from blogsearch.boundary.vdb.base import VectorIndex
from blogsearch.configs.search import SearchSettings
from blogsearch.core.exceptions import BlogSearchException, InvalidInputError, SearchFailedError
from blogsearch.core.indexing.embedding_client import EmbeddingClient
from blogsearch.core.search.ranking import (
    dedupe_best_per_document,
    make_snippet,
    merge_unique,
    rank_hits,
)
from blogsearch.core.search.threshold import select_threshold
from blogsearch.models.document import DocumentFilters
from blogsearch.models.search import (
    CandidateSource,
    SearchCandidate,
    SearchHit,
    SearchOptions,
    SearchResult,
    SearchType,
    VectorSearchOptions,
)
from blogsearch.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)


def _total_pages(total: int, page_size: int) -> int:
    return math.ceil(total / page_size) if total > 0 else 0


class HybridSearchEngine:
    """
    Lexical-first search with semantic supplementation.

    Holds no per-request state; one instance serves concurrent searches.
    """

    def __init__(
        self,
        document_store: DocumentStore,
        embedding_client: EmbeddingClient,
        vector_index: VectorIndex,
        settings: SearchSettings,
    ) -> None:
        self._store = document_store
        self._client = embedding_client
        self._index = vector_index
        self._settings = settings

    async def search(self, query: str, options: SearchOptions | None = None) -> SearchResult:
        """
        Hybrid search returning one ranked page.

        Never raises for collaborator failures or timeouts; those become a
        result with success=False. Cancellation propagates.

        Args:
            query: Free-text query
            options: Paging, filters and threshold override

        Returns:
            SearchResult: Page of hits with counts and search type
        """
        options = options or SearchOptions()
        return await self._guarded(query, options.page, self._search(query, options))

    async def vector_only_search(
        self,
        query: str,
        options: VectorSearchOptions | None = None,
    ) -> SearchResult:
        """
        Semantic search without the lexical branch.

        Args:
            query: Free-text query
            options: Limit, page, publish filter and threshold override

        Returns:
            SearchResult: search_type "vector"
        """
        options = options or VectorSearchOptions()
        return await self._guarded(query, options.page, self._vector_only(query, options))

    async def _guarded(self, query: str, page: int, operation) -> SearchResult:
        timeout = self._settings.timeout_seconds
        try:
            return await asyncio.wait_for(operation, timeout=timeout)
        except asyncio.TimeoutError:
            log_with_context(
                logger,
                logging.WARNING,
                f"{__name__}:search - Timed out after {timeout}s",
                query=query,
            )
            return SearchResult.failure(query, page, f"Search timed out after {timeout}s")
        except Exception as e:
            log_exception_with_context(logger, f"{__name__}:search - FAILED", e, query=query)
            return SearchResult.failure(query, page, str(e))

    async def _search(self, query: str, options: SearchOptions) -> SearchResult:
        if options.page_size > self._settings.max_page_size:
            raise InvalidInputError(
                f"page_size cannot exceed {self._settings.max_page_size}",
                field="page_size",
                details={"page_size": options.page_size},
            )

        term = query.strip()
        filters = DocumentFilters(
            only_published=options.only_published,
            category=options.category,
            tag=options.tag,
        )

        try:
            documents, lexical_total = await self._store.find_by_substring(
                term, filters, options.page, options.page_size
            )
        except BlogSearchException as e:
            raise SearchFailedError(f"Lexical search failed: {e.message}", query=term) from e

        lexical_hits = [
            SearchHit(document=doc, source=CandidateSource.LEXICAL, snippet=doc.brief)
            for doc in documents
        ]

        vector_hits: list[SearchHit] = []
        threshold = None
        needs_supplement = bool(term) and (
            len(documents) < options.page_size * self._settings.supplement_ratio
        )

        if needs_supplement:
            remaining = options.page_size - len(documents)
            threshold = select_threshold(term, options.min_similarity)
            try:
                candidates = await self._vector_candidates(term, 2 * remaining, threshold)
                enriched = await self._enrich(candidates, filters)
            except BlogSearchException as e:
                raise SearchFailedError(f"Vector search failed: {e.message}", query=term) from e
            vector_hits = enriched[:remaining]

        merged = rank_hits(merge_unique(lexical_hits, vector_hits))
        # Only vector documents that made it onto this page count towards the total
        vector_shown = sum(1 for hit in merged if hit.source is CandidateSource.VECTOR)
        total = lexical_total + vector_shown

        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:search - SUCCESS: lexical={len(lexical_hits)}, vector={vector_shown}",
            query=term,
            threshold=threshold,
        )
        return SearchResult(
            query=query,
            results=merged,
            total_count=total,
            page=options.page,
            total_pages=_total_pages(total, options.page_size),
            search_type=SearchType.HYBRID if needs_supplement else SearchType.TRADITIONAL,
            lexical_count=len(lexical_hits),
            vector_count=vector_shown,
            threshold=threshold,
        )

    async def _vector_only(self, query: str, options: VectorSearchOptions) -> SearchResult:
        term = query.strip()
        if not term:
            return SearchResult(query=query, page=options.page, search_type=SearchType.VECTOR)

        threshold = select_threshold(term, options.min_similarity)
        try:
            candidates = await self._vector_candidates(term, 2 * options.limit, threshold)
            hits = await self._enrich(candidates, DocumentFilters(only_published=options.only_published))
        except BlogSearchException as e:
            raise SearchFailedError(f"Vector search failed: {e.message}", query=term) from e

        start = (options.page - 1) * options.limit
        page_hits = hits[start : start + options.limit]
        return SearchResult(
            query=query,
            results=page_hits,
            total_count=len(hits),
            page=options.page,
            total_pages=_total_pages(len(hits), options.limit),
            search_type=SearchType.VECTOR,
            vector_count=len(page_hits),
            threshold=threshold,
        )

    async def _vector_candidates(
        self,
        term: str,
        k: int,
        threshold: float,
    ) -> list[SearchCandidate]:
        """Embed, query the index for k fragments, keep the best per document."""
        vector = await self._client.embed(term)
        matches = await self._index.query_nearest(vector, k=k, min_similarity=threshold)
        return dedupe_best_per_document(matches)

    async def _enrich(
        self,
        candidates: Sequence[SearchCandidate],
        filters: DocumentFilters,
    ) -> list[SearchHit]:
        """Attach documents passing filters; similarity descending, newest first on ties."""
        if not candidates:
            return []
        documents = await self._store.find_by_ids(
            [candidate.document_id for candidate in candidates], filters
        )
        by_id = {doc.id: doc for doc in documents}

        hits = [
            SearchHit(
                document=by_id[candidate.document_id],
                source=CandidateSource.VECTOR,
                similarity=candidate.similarity,
                snippet=make_snippet(
                    candidate.matched_fragment,
                    by_id[candidate.document_id].brief,
                    self._settings.snippet_length,
                ),
            )
            for candidate in candidates
            if candidate.document_id in by_id
        ]
        return rank_hits(hits)
