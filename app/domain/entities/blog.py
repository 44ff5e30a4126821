"""Domain entities for moderated blog posts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class BlogStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


@dataclass
class Comment:
    user_id: int
    text: str
    name: str | None = None
    avatar: str | None = None
    id: int | None = None
    date: datetime | None = None


@dataclass
class Blog:
    """A student post that becomes public once approved."""

    id: int | None
    title: str
    content: str
    author_id: int
    status: BlogStatus = BlogStatus.PENDING
    rejection_reason: str = ""
    featured_image: str = "default-blog.jpg"
    tags: list[str] = field(default_factory=list)
    views: int = 0
    comments: list[Comment] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_published(self) -> bool:
        return self.status is BlogStatus.APPROVED


__all__ = ["Blog", "BlogStatus", "Comment"]
