"""
Tests for the adaptive similarity threshold.

System role: Verification of per-query vector cutoffs
"""

import pytest

from blogsearch.core.search.threshold import QueryScript, detect_script, select_threshold


class TestDetectScript:
    """Test suite for query script classification."""

    @pytest.mark.parametrize(
        ("query", "expected"),
        [
            ("摇床", QueryScript.CJK),
            ("深度学习算法优化", QueryScript.CJK),
            ("AI", QueryScript.LATIN),
            ("machine learning", QueryScript.LATIN),
            ("React 开发", QueryScript.MIXED),
            ("python3", QueryScript.MIXED),
            ("   ", QueryScript.MIXED),
        ],
    )
    def test_detect_script(self, query: str, expected: QueryScript) -> None:
        assert detect_script(query) is expected


class TestSelectThreshold:
    """Test suite for threshold buckets."""

    @pytest.mark.parametrize(
        ("query", "expected"),
        [
            ("摇床", 0.2),
            ("机器学习", 0.3),
            ("深度学习算法优化", 0.4),
            ("AI", 0.4),
            ("React", 0.5),
            ("artificial intelligence and deep learning", 0.6),
            ("React 开发", 0.3),
        ],
    )
    def test_buckets(self, query: str, expected: float) -> None:
        assert select_threshold(query) == pytest.approx(expected)

    @pytest.mark.parametrize(
        ("query", "expected"),
        [
            ("摇床机", 0.3),
            ("深度学习算", 0.4),
            ("abc", 0.4),
            ("abcd", 0.5),
            ("abcdefghij", 0.5),
            ("abcdefghijk", 0.6),
        ],
    )
    def test_bucket_edges(self, query: str, expected: float) -> None:
        assert select_threshold(query) == pytest.approx(expected)

    def test_surrounding_whitespace_is_ignored(self) -> None:
        assert select_threshold("  摇床  ") == pytest.approx(0.2)

    def test_override_wins(self) -> None:
        assert select_threshold("摇床", override=0.75) == 0.75
        assert select_threshold("AI", override=0.0) == 0.0

    def test_threshold_always_in_unit_interval(self) -> None:
        for query in ["", "x", "长" * 50, "word " * 50, "混合 mixed 123"]:
            assert 0.0 <= select_threshold(query) <= 1.0
