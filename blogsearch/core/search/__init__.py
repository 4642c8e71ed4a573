"""
Search: threshold policy, ranking helpers and the hybrid orchestrator.
"""

from blogsearch.core.search.hybrid_search import HybridSearchEngine
from blogsearch.core.search.ranking import (
    dedupe_best_per_document,
    make_snippet,
    merge_unique,
    rank_hits,
)
from blogsearch.core.search.threshold import QueryScript, detect_script, select_threshold

__all__ = [
    "HybridSearchEngine",
    "dedupe_best_per_document",
    "make_snippet",
    "merge_unique",
    "rank_hits",
    "QueryScript",
    "detect_script",
    "select_threshold",
]
