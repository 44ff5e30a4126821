"""Use case for editing blog posts."""

from collections.abc import Iterable
from dataclasses import replace

from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    NotificationDispatcher,
    notify_blog_resubmitted,
)
from app.domain.entities import Blog, BlogStatus, User
from app.domain.errors import ForbiddenError, NotFoundError
from app.infrastructure.repositories import BlogRepository

from .validators import ensure_valid_content, ensure_valid_title, normalize_tags


def update_blog(
    session: Session,
    dispatcher: NotificationDispatcher,
    blog_id: int,
    *,
    editor: User,
    title: str | None = None,
    content: str | None = None,
    tags: str | Iterable[str] | None = None,
    featured_image: str | None = None,
) -> Blog:
    """Edit a post.

    Authors may only edit posts that are not approved yet; editing a rejected
    post sends it back to review. Administrators may edit anything.
    """

    repository = BlogRepository(session)
    blog = repository.get(blog_id)
    if blog is None:
        raise NotFoundError("Blog not found")

    is_admin = editor.is_admin()
    if blog.author_id != editor.id and not is_admin:
        raise ForbiddenError("Not authorized to update this blog")
    if blog.status is BlogStatus.APPROVED and not is_admin:
        raise ForbiddenError("Cannot update an approved blog")

    status = blog.status
    if status is BlogStatus.REJECTED and not is_admin:
        status = BlogStatus.PENDING

    updated = repository.update(
        replace(
            blog,
            title=ensure_valid_title(title) if title else blog.title,
            content=ensure_valid_content(content) if content else blog.content,
            tags=normalize_tags(tags) if tags is not None else blog.tags,
            featured_image=featured_image or blog.featured_image,
            status=status,
        )
    )

    if updated.status is BlogStatus.PENDING and not is_admin:
        notify_blog_resubmitted(dispatcher, updated, editor=editor)
    return updated
