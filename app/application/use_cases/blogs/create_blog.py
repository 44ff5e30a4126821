"""Use case for submitting blog posts."""

from collections.abc import Iterable

from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    NotificationDispatcher,
    notify_blog_submitted,
)
from app.domain.entities import Blog, BlogStatus, User
from app.infrastructure.repositories import BlogRepository
from app.utils import now_in_app_timezone

from .validators import ensure_valid_content, ensure_valid_title, normalize_tags


def create_blog(
    session: Session,
    dispatcher: NotificationDispatcher,
    *,
    author: User,
    title: str,
    content: str,
    tags: str | Iterable[str] | None = None,
    featured_image: str | None = None,
) -> Blog:
    """Store a new post awaiting moderation and alert the administrators."""

    blog = Blog(
        id=None,
        title=ensure_valid_title(title),
        content=ensure_valid_content(content),
        author_id=author.id,
        status=BlogStatus.PENDING,
        featured_image=featured_image or "default-blog.jpg",
        tags=normalize_tags(tags),
        created_at=now_in_app_timezone(),
    )
    created = BlogRepository(session).create(blog)
    notify_blog_submitted(dispatcher, created)
    return created
