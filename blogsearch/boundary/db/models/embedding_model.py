"""
Post embedding ORM model.

One row per embedded fragment: exactly one title row per post plus either
one content row or an ordered run of chunk rows.

Dependencies: sqlalchemy, pgvector, blogsearch.boundary.db.base
System role: Production vector storage (pgvector)
"""

import uuid

from pgvector.sqlalchemy import Vector
from sqlalchemy import Enum, ForeignKey, Integer, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from blogsearch.boundary.db.base import Base, TimestampMixin, UUIDMixin
from blogsearch.configs import get_settings
from blogsearch.models.embedding import ContentType

EMBEDDING_DIMENSION = get_settings().vector_store.embedding_dimension


class PostEmbeddingModel(Base, UUIDMixin, TimestampMixin):
    """
    Embedded fragment of a post.

    Attributes:
        id: Fragment id
        post_id: Owning post (rows cascade on post deletion)
        content_type: title, content or chunk
        text_fragment: Exact text that was embedded
        embedding: Vector of EMBEDDING_DIMENSION floats
        chunk_index: 0-based position for chunk rows, NULL otherwise
        token_count: Token length of text_fragment
    """

    __tablename__ = "post_embeddings"

    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    content_type: Mapped[ContentType] = mapped_column(
        Enum(ContentType, native_enum=False),
        nullable=False,
    )

    text_fragment: Mapped[str] = mapped_column(Text, nullable=False)

    embedding = mapped_column(Vector(EMBEDDING_DIMENSION), nullable=False)

    chunk_index: Mapped[int | None] = mapped_column(Integer, nullable=True, default=None)

    token_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
