"""Use cases for retrieving a single user."""

from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.domain.entities import Blog, BlogStatus, Contest, User
from app.domain.errors import NotFoundError
from app.infrastructure.repositories import (
    BlogRepository,
    ContestRepository,
    UserRepository,
)

_RECENT_ITEMS = 5


@dataclass(frozen=True)
class UserActivity:
    """A user together with a summary of their blogs and contests."""

    user: User
    recent_blogs: list[Blog]
    recent_contests: list[Contest]
    total_blogs: int
    published_blogs: int
    pending_blogs: int
    registered_contests: int


def get_user(session: Session, user_id: int, *, include_inactive: bool = True) -> User:
    """Return the requested user or raise an error if it does not exist."""

    repository = UserRepository(session)
    user = repository.get(user_id)
    if user is None:
        raise NotFoundError("User not found")
    if not include_inactive and not user.is_active:
        raise NotFoundError("User not found")
    return user


def get_user_activity(session: Session, user_id: int) -> UserActivity:
    user = get_user(session, user_id)
    blogs = BlogRepository(session)
    contests = ContestRepository(session)
    return UserActivity(
        user=user,
        recent_blogs=list(blogs.list(author_id=user_id, limit=_RECENT_ITEMS)),
        recent_contests=list(contests.list_for_participant(user_id, limit=_RECENT_ITEMS)),
        total_blogs=blogs.count(author_id=user_id),
        published_blogs=blogs.count(author_id=user_id, status=BlogStatus.APPROVED.value),
        pending_blogs=blogs.count(author_id=user_id, status=BlogStatus.PENDING.value),
        registered_contests=contests.count_for_participant(user_id),
    )
