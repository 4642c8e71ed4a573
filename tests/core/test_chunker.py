"""
Tests for the sliding-window chunker.

System role: Verification of chunk geometry and lossless reconstruction
"""

import math

import pytest

from blogsearch.core.exceptions import InvalidInputError
from blogsearch.core.indexing.chunker import Chunker, reconstruct
from blogsearch.core.indexing.token_counter import RegexTokenCounter, TiktokenCounter


def words(n: int) -> str:
    return " ".join(f"word{i}" for i in range(n))


@pytest.fixture
def chunker() -> Chunker:
    return Chunker(RegexTokenCounter())


class TestChunkerValidation:
    """Test suite for window parameter checks."""

    @pytest.mark.parametrize(
        ("max_tokens", "overlap"),
        [(10, 10), (10, 12), (0, 0), (-1, 0), (10, -1)],
    )
    def test_invalid_window_raises(self, chunker: Chunker, max_tokens: int, overlap: int) -> None:
        with pytest.raises(InvalidInputError):
            chunker.chunk("some text here", max_tokens, overlap)

    def test_empty_text_returns_no_chunks(self, chunker: Chunker) -> None:
        assert chunker.chunk("", 500, 50) == []
        assert chunker.chunk("   ", 500, 50) == []


class TestChunkerGeometry:
    """Test suite for chunk counts, sizes and overlap."""

    def test_short_text_is_single_chunk(self, chunker: Chunker) -> None:
        text = words(10)

        chunks = chunker.chunk(text, 16, 4)

        assert len(chunks) == 1
        assert chunks[0].text == text
        assert chunks[0].index == 0
        assert chunks[0].token_count == 10

    @pytest.mark.parametrize(("n", "max_tokens", "overlap"), [(100, 16, 4), (101, 16, 4), (1200, 500, 50), (17, 16, 0)])
    def test_chunk_count_formula(self, chunker: Chunker, n: int, max_tokens: int, overlap: int) -> None:
        chunks = chunker.chunk(words(n), max_tokens, overlap)

        assert len(chunks) == math.ceil((n - overlap) / (max_tokens - overlap))

    def test_every_chunk_within_limit_and_indexed_in_order(self, chunker: Chunker) -> None:
        chunks = chunker.chunk(words(250), 16, 4)

        assert all(chunk.token_count <= 16 for chunk in chunks)
        assert [chunk.index for chunk in chunks] == list(range(len(chunks)))

    def test_consecutive_chunks_share_overlap_tokens(self, chunker: Chunker) -> None:
        chunks = chunker.chunk(words(100), 16, 4)

        for previous, current in zip(chunks, chunks[1:]):
            assert current.text.split()[:4] == previous.text.split()[-4:]

    def test_offsets_locate_chunk_in_source(self, chunker: Chunker) -> None:
        text = words(60)

        for chunk in chunker.chunk(text, 16, 4):
            assert text[chunk.start : chunk.end] == chunk.text


class TestReconstruct:
    """Test suite for overlap-aware reassembly."""

    @pytest.mark.parametrize(
        "text",
        [
            words(137),
            "  leading and trailing whitespace kept  " * 12,
            "机器学习是人工智能的一个分支。深度学习使用神经网络。" * 10,
            "Mixed 中英文 content, with punctuation! 还有标点。" * 15,
        ],
    )
    def test_reconstruct_returns_original(self, chunker: Chunker, text: str) -> None:
        chunks = chunker.chunk(text, 16, 4)

        assert reconstruct(chunks) == text

    def test_reconstruct_with_tiktoken(self) -> None:
        try:
            counter = TiktokenCounter()
        except Exception as e:  # encoding files are fetched on first use
            pytest.skip(f"cl100k_base unavailable: {e}")
        text = "Semantic search over 博客文章 needs chunking. " * 40

        chunks = Chunker(counter).chunk(text, 32, 8)

        assert len(chunks) > 1
        assert all(chunk.token_count <= 32 for chunk in chunks)
        assert reconstruct(chunks) == text
