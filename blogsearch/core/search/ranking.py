"""
Candidate deduplication, merging and ranking.

Dependencies: blogsearch.models
System role: Result assembly for the hybrid search orchestrator
"""

from typing import Iterable, Sequence

from blogsearch.models.embedding import NearestMatch
from blogsearch.models.search import CandidateSource, SearchCandidate, SearchHit


def make_snippet(fragment: str | None, brief: str | None, length: int = 200) -> str | None:
    """
    First length characters of the matched fragment, "..." appended when cut.

    Falls back to brief when there is no fragment text.
    """
    if not fragment:
        return brief
    if len(fragment) > length:
        return fragment[:length] + "..."
    return fragment


def dedupe_best_per_document(matches: Iterable[NearestMatch]) -> list[SearchCandidate]:
    """
    Keep the highest-similarity fragment of each document.

    Returns:
        list[SearchCandidate]: One candidate per document, similarity descending
    """
    best: dict = {}
    for match in matches:
        current = best.get(match.document_id)
        if current is None or match.similarity > current.similarity:
            best[match.document_id] = match

    candidates = [
        SearchCandidate(
            document_id=match.document_id,
            similarity=match.similarity,
            matched_fragment=match.text_fragment,
            source=CandidateSource.VECTOR,
        )
        for match in best.values()
    ]
    candidates.sort(key=lambda candidate: candidate.similarity, reverse=True)
    return candidates


def merge_unique(*groups: Sequence[SearchHit]) -> list[SearchHit]:
    """Concatenate hit lists in order, keeping the first hit per document."""
    seen = set()
    merged: list[SearchHit] = []
    for group in groups:
        for hit in group:
            if hit.document.id in seen:
                continue
            seen.add(hit.document.id)
            merged.append(hit)
    return merged


def _rank_key(hit: SearchHit) -> tuple:
    recency = -hit.document.sort_time.timestamp()
    if hit.source is CandidateSource.LEXICAL:
        return (0, 0.0, recency)
    return (1, -(hit.similarity or 0.0), recency)


def rank_hits(hits: Iterable[SearchHit]) -> list[SearchHit]:
    """
    Order hits for display.

    Lexical hits come first, newest first. Vector hits follow by similarity
    descending, newest first on ties.
    """
    return sorted(hits, key=_rank_key)
