"""
Document domain model.

Read-only view of a blog post as seen by the search engine. Built from
the ORM row by the document store; never written back.

Dependencies: pydantic
System role: Post data contract between store, pipeline and search
"""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class Document(BaseModel):
    """Blog post fields the engine reads."""

    id: uuid.UUID
    title: str
    body: str = Field(default="", description="Full post content")
    brief: str | None = Field(default=None, description="Short summary shown in listings")
    published: bool = False
    category: str | None = Field(default=None, description="Category slug")
    tags: list[str] = Field(default_factory=list, description="Tag slugs")
    created_at: datetime
    published_at: datetime | None = None

    @property
    def sort_time(self) -> datetime:
        """Publish time if published, else creation time."""
        return self.published_at or self.created_at

    @classmethod
    def from_model(cls, post: Any) -> "Document":
        """
        Build a Document from a PostModel row with category and tags loaded.

        Args:
            post: PostModel instance

        Returns:
            Document: Detached domain view
        """
        return cls(
            id=post.id,
            title=post.title,
            body=post.content or "",
            brief=post.brief,
            published=post.published,
            category=post.category.slug if post.category is not None else None,
            tags=[tag.slug for tag in post.tags],
            created_at=post.created_at,
            published_at=post.published_at,
        )


@dataclass(frozen=True)
class DocumentFilters:
    """Filters shared by the lexical and vector branches."""

    only_published: bool = True
    category: str | None = None
    tag: str | None = None
