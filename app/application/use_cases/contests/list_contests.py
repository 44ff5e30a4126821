"""Use cases for listing contests."""

from sqlalchemy.orm import Session

from app.domain.entities import Contest, Page, RegisteredContest, page_offset
from app.infrastructure.repositories import ContestRepository
from app.utils import now_in_app_timezone

from .refresh_status import refresh_contest_status


def list_contests(
    session: Session,
    *,
    status: str | None = None,
    category: str | None = None,
    search: str | None = None,
    page: int = 1,
    limit: int = 10,
) -> Page[Contest]:
    """Return active contests, newest first, with their status brought up to date."""

    repository = ContestRepository(session)
    now = now_in_app_timezone()
    contests = repository.list(
        status=status,
        category=category,
        search=search,
        skip=page_offset(page, limit),
        limit=limit,
    )
    return Page(
        items=[refresh_contest_status(repository, contest, now) for contest in contests],
        total=repository.count(status=status, category=category, search=search),
        page=page,
        limit=limit,
    )


def list_my_contests(
    session: Session,
    user_id: int,
    *,
    status: str | None = None,
    page: int = 1,
    limit: int = 10,
) -> Page[RegisteredContest]:
    """Return the contests ``user_id`` registered for, by start date."""

    repository = ContestRepository(session)
    now = now_in_app_timezone()
    contests = repository.list_for_participant(
        user_id, status=status, skip=page_offset(page, limit), limit=limit
    )
    items = []
    for contest in contests:
        contest = refresh_contest_status(repository, contest, now)
        items.append(
            RegisteredContest(
                contest=contest, participant=contest.find_participant(user_id)
            )
        )
    return Page(
        items=items,
        total=repository.count_for_participant(user_id, status=status),
        page=page,
        limit=limit,
    )
