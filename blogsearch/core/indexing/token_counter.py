"""
Token counting for chunk-sizing decisions.

Both counters report token start offsets as well as counts, so the chunker
can cut the original text on token boundaries without re-decoding.

Dependencies: tiktoken, blogsearch.configs
System role: Token estimates for the embedding pipeline
"""

import re
from abc import ABC, abstractmethod

import tiktoken

from blogsearch.configs.indexing import IndexingSettings
from blogsearch.core.exceptions import InvalidInputError

# CJK ideographs, kana and hangul syllables
_CJK_RANGES = "぀-ヿ㐀-䶿一-鿿豈-﫿가-힯"
_REGEX_TOKEN = re.compile(rf"[{_CJK_RANGES}]|[^\W{_CJK_RANGES}]+|[^\w\s]")


class TokenCounter(ABC):
    """Deterministic token estimator."""

    @abstractmethod
    def token_offsets(self, text: str) -> list[int]:
        """
        Start character offset of every token in text.

        Offsets are non-decreasing; len(result) is the token count.
        """

    def count_tokens(self, text: str) -> int:
        """Number of tokens in text."""
        return len(self.token_offsets(text))


class TiktokenCounter(TokenCounter):
    """BPE token counter backed by a tiktoken encoding."""

    def __init__(self, encoding_name: str = "cl100k_base") -> None:
        self.encoding_name = encoding_name
        self._encoding = tiktoken.get_encoding(encoding_name)

    def _encode(self, text: str) -> list[int]:
        # Post bodies may legitimately contain strings like "<|endoftext|>"
        return self._encoding.encode(text, disallowed_special=())

    def count_tokens(self, text: str) -> int:
        return len(self._encode(text))

    def token_offsets(self, text: str) -> list[int]:
        tokens = self._encode(text)
        if not tokens:
            return []
        _, offsets = self._encoding.decode_with_offsets(tokens)
        return offsets


class RegexTokenCounter(TokenCounter):
    """
    Word-level token counter.

    Each CJK character is one token, each run of other word characters is
    one token, and each remaining non-space character is one token.
    """

    def token_offsets(self, text: str) -> list[int]:
        return [match.start() for match in _REGEX_TOKEN.finditer(text)]


def build_token_counter(settings: IndexingSettings) -> TokenCounter:
    """
    Create the token counter named in configuration.

    Args:
        settings: Indexing settings

    Returns:
        TokenCounter: Configured counter

    Raises:
        InvalidInputError: If the tokenizer name is unknown
    """
    name = settings.tokenizer.lower()
    if name == "tiktoken":
        return TiktokenCounter(settings.encoding_name)
    if name == "regex":
        return RegexTokenCounter()
    raise InvalidInputError(
        f"Unknown tokenizer: {settings.tokenizer}. Must be 'tiktoken' or 'regex'.",
        field="tokenizer",
    )
