"""Use case for updating contests."""

from dataclasses import replace
from datetime import datetime
from decimal import Decimal

from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    NotificationDispatcher,
    notify_contest_updated,
)
from app.domain.entities import Contest, ContestStatus, User, derive_status
from app.domain.errors import NotFoundError
from app.infrastructure.repositories import ContestRepository
from app.utils import ensure_app_timezone, now_in_app_timezone

from .validators import ensure_valid_capacity, ensure_valid_fee, ensure_valid_schedule


def update_contest(
    session: Session,
    dispatcher: NotificationDispatcher,
    contest_id: int,
    *,
    editor: User,
    title: str | None = None,
    description: str | None = None,
    category: str | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    registration_deadline: datetime | None = None,
    entry_fee: Decimal | None = None,
    max_participants: int | None = None,
    location: str | None = None,
    featured_image: str | None = None,
    status: ContestStatus | None = None,
    is_active: bool | None = None,
) -> Contest:
    """Apply the provided fields and tell current participants about it.

    ``max_participants=0`` lifts the participant limit.
    """

    repository = ContestRepository(session)
    current = repository.get(contest_id)
    if current is None:
        raise NotFoundError("Contest not found")

    if max_participants == 0:
        new_capacity = None
    elif max_participants is not None:
        new_capacity = ensure_valid_capacity(max_participants)
    else:
        new_capacity = current.max_participants

    updated = replace(
        current,
        title=title or current.title,
        description=description or current.description,
        category=category or current.category,
        start_date=ensure_app_timezone(start_date) or current.start_date,
        end_date=ensure_app_timezone(end_date) or current.end_date,
        registration_deadline=(
            ensure_app_timezone(registration_deadline) or current.registration_deadline
        ),
        entry_fee=ensure_valid_fee(entry_fee) if entry_fee is not None else current.entry_fee,
        max_participants=new_capacity,
        location=location or current.location,
        featured_image=featured_image or current.featured_image,
        is_active=is_active if is_active is not None else current.is_active,
    )
    ensure_valid_schedule(
        updated.start_date, updated.end_date, updated.registration_deadline
    )
    if status is not None:
        updated.status = status
    else:
        updated.status = derive_status(now_in_app_timezone(), updated)

    saved = repository.update(updated)
    notify_contest_updated(dispatcher, saved, editor=editor)
    return saved
