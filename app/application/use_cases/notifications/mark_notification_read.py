"""Use case for flagging a notification as read by one recipient."""

from sqlalchemy.orm import Session

from app.domain.entities import NotificationView
from app.domain.errors import ForbiddenError, NotFoundError
from app.infrastructure.repositories import NotificationRepository


def mark_notification_read(
    session: Session, notification_id: int, *, user_id: int
) -> NotificationView:
    """Mark the notification as read for ``user_id``; repeating it is harmless."""

    repository = NotificationRepository(session)
    notification = repository.get(notification_id)
    if notification is None:
        raise NotFoundError("Notification not found")
    if not notification.is_target(user_id):
        raise ForbiddenError("Not authorized to access this notification")

    repository.mark_as_read(notification_id, user_id=user_id)
    updated = repository.get(notification_id)
    return NotificationView(notification=updated, is_read_by_me=True)
