"""
Embedding record models.

EmbeddingRecord is the unit written to the vector index. ChunkSpec and
NearestMatch are transient values passed between pipeline stages.

Dependencies: pydantic
System role: Vector index data contracts
"""

import enum
import uuid
from dataclasses import dataclass

from pydantic import BaseModel, Field, model_validator


class ContentType(str, enum.Enum):
    """
    Kind of text an embedding was computed from.

    TITLE: Post title, always exactly one per post
    CONTENT: Whole body, used when the body fits within the token ceiling
    CHUNK: One window of a long body, ordered by chunk_index
    """

    TITLE = "title"
    CONTENT = "content"
    CHUNK = "chunk"


class EmbeddingRecord(BaseModel):
    """One (fragment, vector) row owned by the vector index."""

    document_id: uuid.UUID
    content_type: ContentType
    text_fragment: str
    vector: list[float] = Field(description="Embedding vector")
    chunk_index: int | None = Field(default=None, ge=0)
    token_count: int = Field(ge=0)

    @model_validator(mode="after")
    def _check_chunk_index(self) -> "EmbeddingRecord":
        if self.content_type is ContentType.CHUNK and self.chunk_index is None:
            raise ValueError("chunk records require chunk_index")
        if self.content_type is not ContentType.CHUNK and self.chunk_index is not None:
            raise ValueError(f"{self.content_type.value} records cannot carry chunk_index")
        return self


@dataclass(frozen=True)
class ChunkSpec:
    """
    One token-bounded window of a text.

    start and end are character offsets into the source text, so the
    overlap with the previous chunk is text[start:previous.end].
    """

    text: str
    index: int
    token_count: int
    start: int
    end: int


@dataclass(frozen=True)
class NearestMatch:
    """A fragment returned by a nearest-neighbour query."""

    fragment_id: str
    document_id: uuid.UUID
    similarity: float
    text_fragment: str
    content_type: ContentType
    chunk_index: int | None = None
