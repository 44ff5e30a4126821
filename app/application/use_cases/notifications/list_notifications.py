"""Use cases for listing notifications."""

from sqlalchemy.orm import Session

from app.domain.entities import Notification, NotificationView, Page, page_offset
from app.infrastructure.repositories import NotificationRepository


def list_notifications_for(
    session: Session,
    user_id: int,
    *,
    unread_only: bool = False,
    page: int = 1,
    limit: int = 10,
) -> Page[NotificationView]:
    """Return the notifications addressed to ``user_id``, newest first."""

    repository = NotificationRepository(session)
    notifications = repository.list_for_user(
        user_id,
        unread_only=unread_only,
        skip=page_offset(page, limit),
        limit=limit,
    )
    return Page(
        items=[
            NotificationView(
                notification=notification,
                is_read_by_me=notification.is_read_by(user_id),
            )
            for notification in notifications
        ],
        total=repository.count_for_user(user_id, unread_only=unread_only),
        page=page,
        limit=limit,
    )


def list_all_notifications(
    session: Session, *, page: int = 1, limit: int = 10
) -> Page[Notification]:
    repository = NotificationRepository(session)
    return Page(
        items=list(repository.list(skip=page_offset(page, limit), limit=limit)),
        total=repository.count(),
        page=page,
        limit=limit,
    )
