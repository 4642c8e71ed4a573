"""
Tests for ranking helpers.

System role: Verification of snippet, dedupe, merge and ordering rules
"""

import uuid
from datetime import datetime, timedelta

from blogsearch.core.search.ranking import (
    dedupe_best_per_document,
    make_snippet,
    merge_unique,
    rank_hits,
)
from blogsearch.models.document import Document
from blogsearch.models.embedding import ContentType, NearestMatch
from blogsearch.models.search import CandidateSource, SearchHit

NOW = datetime(2024, 6, 1)


def doc(age_days: int = 0, brief: str | None = None) -> Document:
    return Document(
        id=uuid.uuid4(),
        title="t",
        brief=brief,
        published=True,
        created_at=NOW - timedelta(days=age_days),
    )


def match(document_id: uuid.UUID, similarity: float, text: str = "fragment") -> NearestMatch:
    return NearestMatch(
        fragment_id=str(uuid.uuid4()),
        document_id=document_id,
        similarity=similarity,
        text_fragment=text,
        content_type=ContentType.CHUNK,
        chunk_index=0,
    )


class TestMakeSnippet:
    def test_short_fragment_kept_whole(self) -> None:
        assert make_snippet("short", "brief") == "short"

    def test_long_fragment_truncated_with_ellipsis(self) -> None:
        snippet = make_snippet("x" * 250, "brief", length=200)

        assert snippet == "x" * 200 + "..."

    def test_falls_back_to_brief(self) -> None:
        assert make_snippet("", "the brief") == "the brief"
        assert make_snippet(None, None) is None


class TestDedupe:
    def test_keeps_best_fragment_per_document(self) -> None:
        # Arrange
        a, b = uuid.uuid4(), uuid.uuid4()
        matches = [match(a, 0.5, "a-low"), match(b, 0.6), match(a, 0.9, "a-high"), match(a, 0.7)]

        # Act
        candidates = dedupe_best_per_document(matches)

        # Assert
        assert [c.document_id for c in candidates] == [a, b]
        assert candidates[0].similarity == 0.9
        assert candidates[0].matched_fragment == "a-high"
        assert all(c.source is CandidateSource.VECTOR for c in candidates)

    def test_empty(self) -> None:
        assert dedupe_best_per_document([]) == []


class TestMergeAndRank:
    def test_merge_drops_duplicates_keeping_first(self) -> None:
        # Arrange
        shared = doc()
        lexical = [SearchHit(document=shared, source=CandidateSource.LEXICAL), SearchHit(document=doc(), source=CandidateSource.LEXICAL)]
        vector = [
            SearchHit(document=shared, source=CandidateSource.VECTOR, similarity=0.9),
            SearchHit(document=doc(), source=CandidateSource.VECTOR, similarity=0.8),
        ]

        # Act
        merged = merge_unique(lexical, vector)

        # Assert
        assert len(merged) == len(lexical) + len(vector) - 1
        assert len({hit.document.id for hit in merged}) == len(merged)
        assert merged[0].source is CandidateSource.LEXICAL

    def test_lexical_first_then_similarity_then_recency(self) -> None:
        # Arrange
        old_lexical = SearchHit(document=doc(age_days=5), source=CandidateSource.LEXICAL)
        new_lexical = SearchHit(document=doc(age_days=1), source=CandidateSource.LEXICAL)
        strong = SearchHit(document=doc(age_days=9), source=CandidateSource.VECTOR, similarity=0.95)
        weak_new = SearchHit(document=doc(age_days=0), source=CandidateSource.VECTOR, similarity=0.5)
        weak_old = SearchHit(document=doc(age_days=3), source=CandidateSource.VECTOR, similarity=0.5)

        # Act
        ranked = rank_hits([weak_old, strong, old_lexical, weak_new, new_lexical])

        # Assert
        assert ranked == [new_lexical, old_lexical, strong, weak_new, weak_old]
