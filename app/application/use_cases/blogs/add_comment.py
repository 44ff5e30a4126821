"""Use case for commenting on blog posts."""

from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    NotificationDispatcher,
    notify_new_comment,
)
from app.domain.entities import Comment, User
from app.domain.errors import ForbiddenError, InvalidSpecError, NotFoundError
from app.infrastructure.repositories import BlogRepository


def add_comment(
    session: Session,
    dispatcher: NotificationDispatcher,
    blog_id: int,
    *,
    user: User,
    text: str,
) -> list[Comment]:
    """Add a comment to a published post and return its comments, newest first."""

    if not text or not text.strip():
        raise InvalidSpecError("Comment text is required")

    repository = BlogRepository(session)
    blog = repository.get(blog_id)
    if blog is None:
        raise NotFoundError("Blog not found")
    if not blog.is_published():
        raise ForbiddenError("Cannot comment on unpublished blogs")

    updated = repository.add_comment(
        blog.id,
        Comment(user_id=user.id, text=text.strip(), name=user.name, avatar=user.avatar),
    )
    notify_new_comment(dispatcher, updated, commenter=user)
    return updated.comments
