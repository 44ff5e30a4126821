"""Use case for creating contests."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    NotificationDispatcher,
    notify_contest_created,
)
from app.domain.entities import Contest, ContestStatus, User, derive_status
from app.infrastructure.repositories import ContestRepository
from app.utils import ensure_app_timezone, now_in_app_timezone

from .validators import ensure_valid_capacity, ensure_valid_fee, ensure_valid_schedule


def create_contest(
    session: Session,
    dispatcher: NotificationDispatcher,
    *,
    creator: User,
    title: str,
    description: str,
    category: str,
    start_date: datetime,
    end_date: datetime,
    registration_deadline: datetime,
    entry_fee: Decimal = Decimal("0"),
    max_participants: int | None = None,
    location: str | None = None,
    featured_image: str | None = None,
) -> Contest:
    """Create a contest organised by ``creator`` and announce it to students."""

    start_date = ensure_app_timezone(start_date)
    end_date = ensure_app_timezone(end_date)
    registration_deadline = ensure_app_timezone(registration_deadline)
    ensure_valid_schedule(start_date, end_date, registration_deadline)

    contest = Contest(
        id=None,
        title=title,
        description=description,
        category=category,
        start_date=start_date,
        end_date=end_date,
        registration_deadline=registration_deadline,
        entry_fee=ensure_valid_fee(entry_fee),
        max_participants=ensure_valid_capacity(max_participants),
        location=location or "Online",
        featured_image=featured_image or "default-contest.jpg",
        status=ContestStatus.UPCOMING,
        is_active=True,
        organizers=[creator.id],
    )
    contest.status = derive_status(now_in_app_timezone(), contest)

    created = ContestRepository(session).create(contest)
    notify_contest_created(dispatcher, created, creator=creator)
    return created
