"""Use cases for listing users and platform counters."""

from dataclasses import dataclass
from datetime import timedelta

from sqlalchemy.orm import Session

from app.domain.entities import (
    ROLE_ADMIN,
    ROLE_STUDENT,
    BlogStatus,
    ContestStatus,
    Page,
    User,
    UserStats,
    page_offset,
)
from app.infrastructure.repositories import (
    BlogRepository,
    ContestRepository,
    UserRepository,
)
from app.utils import now_in_app_timezone

_RECENT_WINDOW = timedelta(days=7)


@dataclass(frozen=True)
class UserListing:
    page: Page[User]
    stats: UserStats


@dataclass(frozen=True)
class PlatformStats:
    total_users: int
    students: int
    admins: int
    active_users: int
    inactive_users: int
    recent_registrations: int
    total_blogs: int
    pending_blogs: int
    approved_blogs: int
    rejected_blogs: int
    total_contests: int
    active_contests: int


def list_users(
    session: Session,
    *,
    role: str | None = None,
    is_active: bool | None = None,
    search: str | None = None,
    page: int = 1,
    limit: int = 10,
) -> UserListing:
    """Return a page of users respecting the filters, plus account counters."""

    repository = UserRepository(session)
    users = repository.list(
        role=role,
        is_active=is_active,
        search=search,
        skip=page_offset(page, limit),
        limit=limit,
    )
    return UserListing(
        page=Page(
            items=list(users),
            total=repository.count(role=role, is_active=is_active, search=search),
            page=page,
            limit=limit,
        ),
        stats=repository.stats(),
    )


def get_platform_stats(session: Session) -> PlatformStats:
    users = UserRepository(session)
    blogs = BlogRepository(session)
    contests = ContestRepository(session)

    total_users = users.count()
    active_users = users.count(is_active=True)
    return PlatformStats(
        total_users=total_users,
        students=users.count(role=ROLE_STUDENT),
        admins=users.count(role=ROLE_ADMIN),
        active_users=active_users,
        inactive_users=total_users - active_users,
        recent_registrations=users.count_created_since(
            now_in_app_timezone() - _RECENT_WINDOW
        ),
        total_blogs=blogs.count(),
        pending_blogs=blogs.count(status=BlogStatus.PENDING.value),
        approved_blogs=blogs.count(status=BlogStatus.APPROVED.value),
        rejected_blogs=blogs.count(status=BlogStatus.REJECTED.value),
        total_contests=contests.count(include_inactive=True),
        active_contests=(
            contests.count(status=ContestStatus.UPCOMING.value)
            + contests.count(status=ContestStatus.ONGOING.value)
        ),
    )
