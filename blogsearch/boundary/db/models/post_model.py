"""
Post ORM models.

Posts belong to at most one category and carry any number of tags.
Relationships load eagerly with selectin so rows can be converted to
Document views after the session is closed.

Dependencies: sqlalchemy, blogsearch.boundary.db.base
System role: Blog content persistence
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Table, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from blogsearch.boundary.db.base import Base, TimestampMixin, UUIDMixin

post_tags = Table(
    "post_tags",
    Base.metadata,
    Column("post_id", Uuid(as_uuid=True), ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Uuid(as_uuid=True), ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


class CategoryModel(Base, UUIDMixin, TimestampMixin):
    """Post category addressed by slug in search filters."""

    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)

    posts = relationship("PostModel", back_populates="category")


class TagModel(Base, UUIDMixin, TimestampMixin):
    """Free-form tag addressed by slug in search filters."""

    __tablename__ = "tags"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)


class PostModel(Base, UUIDMixin, TimestampMixin):
    """
    Blog post ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        title: Post title
        content: Full body text
        brief: Optional short summary, used as snippet fallback
        published: Visibility flag for public search
        published_at: Publish time; search ordering falls back to created_at
        category_id: Optional FK to categories (SET NULL on category deletion)
        category: Eager-loaded CategoryModel
        tags: Eager-loaded TagModel rows
    """

    __tablename__ = "posts"

    title: Mapped[str] = mapped_column(String(512), nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False, default="")

    brief: Mapped[str | None] = mapped_column(
        String(1024),
        nullable=True,
        default=None,
        doc="Short summary shown in listings",
    )

    published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)

    published_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    category_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
    )

    category = relationship("CategoryModel", back_populates="posts", lazy="selectin")
    tags = relationship("TagModel", secondary=post_tags, lazy="selectin")
