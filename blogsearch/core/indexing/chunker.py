"""
Sliding-window text chunker.

Splits long text into token-bounded fragments where each fragment after
the first repeats the last overlap_tokens tokens of its predecessor.

Dependencies: blogsearch.core.indexing.token_counter
System role: First stage of long-body indexing
"""

from blogsearch.core.exceptions import InvalidInputError
from blogsearch.core.indexing.token_counter import TokenCounter
from blogsearch.models.embedding import ChunkSpec


class Chunker:
    """Cut text into overlapping windows measured by a TokenCounter."""

    def __init__(self, token_counter: TokenCounter) -> None:
        self._counter = token_counter

    def chunk(
        self,
        text: str,
        max_tokens_per_chunk: int,
        overlap_tokens: int,
    ) -> list[ChunkSpec]:
        """
        Split text into ordered, overlapping chunks.

        Fragments are cut on token start offsets, so each fragment is an
        exact slice of text (leading whitespace belongs to the first chunk,
        trailing whitespace to the last).

        Args:
            text: Source text
            max_tokens_per_chunk: Upper bound on tokens per fragment
            overlap_tokens: Tokens repeated from the previous fragment

        Returns:
            list[ChunkSpec]: Fragments in order; empty for text without tokens

        Raises:
            InvalidInputError: If the window parameters are inconsistent
        """
        if max_tokens_per_chunk <= 0:
            raise InvalidInputError(
                "max_tokens_per_chunk must be positive",
                field="max_tokens_per_chunk",
                details={"value": max_tokens_per_chunk},
            )
        if overlap_tokens < 0:
            raise InvalidInputError(
                "overlap_tokens cannot be negative",
                field="overlap_tokens",
                details={"value": overlap_tokens},
            )
        if overlap_tokens >= max_tokens_per_chunk:
            raise InvalidInputError(
                "overlap_tokens must be smaller than max_tokens_per_chunk",
                field="overlap_tokens",
                details={
                    "overlap_tokens": overlap_tokens,
                    "max_tokens_per_chunk": max_tokens_per_chunk,
                },
            )

        offsets = self._counter.token_offsets(text)
        total = len(offsets)
        if total == 0:
            return []

        chunks: list[ChunkSpec] = []
        start_token = 0
        while True:
            end_token = min(start_token + max_tokens_per_chunk, total)
            start_char = 0 if start_token == 0 else offsets[start_token]
            end_char = offsets[end_token] if end_token < total else len(text)
            chunks.append(
                ChunkSpec(
                    text=text[start_char:end_char],
                    index=len(chunks),
                    token_count=end_token - start_token,
                    start=start_char,
                    end=end_char,
                )
            )
            if end_token == total:
                break
            start_token = end_token - overlap_tokens

        return chunks


def reconstruct(chunks: list[ChunkSpec]) -> str:
    """
    Join chunk texts, dropping each chunk's overlap with the previous one.

    Args:
        chunks: Output of Chunker.chunk, in order

    Returns:
        str: The text the chunks were cut from
    """
    parts: list[str] = []
    covered = 0
    for chunk in chunks:
        skip = max(covered - chunk.start, 0)
        parts.append(chunk.text[skip:])
        covered = chunk.end
    return "".join(parts)
