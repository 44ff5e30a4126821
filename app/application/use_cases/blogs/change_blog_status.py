"""Use case for moderating blog posts."""

from dataclasses import replace

from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    NotificationDispatcher,
    notify_blog_status_changed,
)
from app.domain.entities import Blog, BlogStatus, User
from app.domain.errors import InvalidSpecError, NotFoundError
from app.infrastructure.repositories import BlogRepository

_MODERATION_STATUSES = (BlogStatus.APPROVED, BlogStatus.REJECTED)


def change_blog_status(
    session: Session,
    dispatcher: NotificationDispatcher,
    blog_id: int,
    *,
    reviewer: User,
    status: BlogStatus | str,
    rejection_reason: str | None = None,
) -> Blog:
    """Approve or reject a post and tell its author."""

    try:
        status = BlogStatus(status)
    except ValueError as exc:
        raise InvalidSpecError("Invalid status") from exc
    if status not in _MODERATION_STATUSES:
        raise InvalidSpecError("Invalid status")
    if status is BlogStatus.REJECTED and not (rejection_reason or "").strip():
        raise InvalidSpecError("Rejection reason is required when status is rejected")

    repository = BlogRepository(session)
    blog = repository.get(blog_id)
    if blog is None:
        raise NotFoundError("Blog not found")

    reason = rejection_reason.strip() if status is BlogStatus.REJECTED else ""
    updated = repository.update(replace(blog, status=status, rejection_reason=reason))
    notify_blog_status_changed(dispatcher, updated, reviewer=reviewer)
    return updated
