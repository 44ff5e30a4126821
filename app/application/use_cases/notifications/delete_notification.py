"""Use case for deleting a notification."""

from sqlalchemy.orm import Session

from app.domain.errors import NotFoundError
from app.infrastructure.repositories import NotificationRepository


def delete_notification(session: Session, notification_id: int) -> None:
    repository = NotificationRepository(session)
    if repository.get(notification_id) is None:
        raise NotFoundError("Notification not found")
    repository.delete(notification_id)
