"""
Embedding client.

Thin async facade over a LangChain Embeddings provider. Search queries
use query mode; everything written to the index uses document mode.
Provider failures surface as ProviderError; there is no retry here,
callers decide.

Dependencies: langchain_core
System role: Embedding generation for indexing and queries
"""

import logging
from typing import Sequence

from langchain_core.embeddings import Embeddings

from blogsearch.core.exceptions import ProviderError

logger = logging.getLogger(__name__)


class EmbeddingClient:
    """Produce vectors for text through one provider."""

    def __init__(self, embeddings: Embeddings, dimension: int | None = None) -> None:
        """
        Args:
            embeddings: LangChain embeddings provider
            dimension: Expected vector length; unchecked when None
        """
        self._embeddings = embeddings
        self.dimension = dimension

    @property
    def provider_name(self) -> str:
        return type(self._embeddings).__name__

    async def embed(self, text: str) -> list[float]:
        """
        Embed a search query with one provider call in query mode.

        Raises:
            ProviderError: On transport, rate-limit or shape failure
        """
        try:
            vector = await self._embeddings.aembed_query(text)
        except Exception as e:
            raise ProviderError(
                f"Embedding provider failed: {e}",
                provider=self.provider_name,
                details={"text_length": len(text)},
            ) from e

        self._check_dimension([vector])
        return list(vector)

    async def embed_document(self, text: str) -> list[float]:
        """
        Embed a single text in document mode.

        Indexed text (titles, bodies, chunks) must share the provider's
        document task type, so this goes through aembed_documents.

        Raises:
            ProviderError: On transport, rate-limit or shape failure
        """
        vectors = await self.embed_batch([text])
        return vectors[0]

    async def embed_batch(self, texts: Sequence[str]) -> list[list[float]]:
        """
        Embed many texts in one provider call, preserving order.

        Returns:
            list[list[float]]: One vector per input text

        Raises:
            ProviderError: On provider failure or when the provider returns
                a different number of vectors than texts
        """
        if not texts:
            return []

        try:
            vectors = await self._embeddings.aembed_documents(list(texts))
        except Exception as e:
            raise ProviderError(
                f"Batch embedding failed: {e}",
                provider=self.provider_name,
                details={"batch_size": len(texts)},
            ) from e

        if len(vectors) != len(texts):
            raise ProviderError(
                "Provider returned a different number of vectors than texts",
                provider=self.provider_name,
                details={"expected": len(texts), "received": len(vectors)},
            )

        self._check_dimension(vectors)
        logger.debug(
            f"{__name__}:embed_batch - Embedded {len(texts)} texts via {self.provider_name}"
        )
        return [list(vector) for vector in vectors]

    def _check_dimension(self, vectors: Sequence[Sequence[float]]) -> None:
        if self.dimension is None:
            return
        for vector in vectors:
            if len(vector) != self.dimension:
                raise ProviderError(
                    "Embedding dimension mismatch",
                    provider=self.provider_name,
                    details={"expected": self.dimension, "received": len(vector)},
                )
