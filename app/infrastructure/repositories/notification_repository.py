"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import (
    Notification,
    RecipientsMode,
    RelatedTo,
    UrgencyLevel,
    reference_from_columns,
    reference_to_columns,
)
from app.infrastructure.models import NotificationModel, NotificationRecipientModel
from app.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_naive_datetime,
)


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: int) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def list_for_user(
        self,
        user_id: int,
        *,
        unread_only: bool = False,
        skip: int = 0,
        limit: int | None = 10,
    ) -> Sequence[Notification]:
        query = self._for_user_query(user_id, unread_only=unread_only)
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        ).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count_for_user(self, user_id: int, *, unread_only: bool = False) -> int:
        return self._for_user_query(user_id, unread_only=unread_only).count()

    def list(self, *, skip: int = 0, limit: int | None = 10) -> Sequence[Notification]:
        query = self.session.query(NotificationModel).order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count(self) -> int:
        return self.session.query(NotificationModel).count()

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel(
            title=notification.title,
            message=notification.message,
            sender_id=notification.sender_id,
            recipients=notification.recipients.value,
            urgency_level=notification.urgency_level.value,
            related_to=notification.related_to.value,
            created_at=(
                ensure_app_naive_datetime(notification.created_at)
                or now_in_app_naive_datetime()
            ),
        )
        model.notification_type, model.related_id = reference_to_columns(
            notification.relation
        )
        model.targets = [
            NotificationRecipientModel(
                user_id=user_id,
                is_read=bool(notification.is_read.get(user_id, False)),
            )
            for user_id in notification.target_users
        ]
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_as_read(self, notification_id: int, *, user_id: int) -> bool:
        """Flag the notification as read for ``user_id``.

        Returns ``False`` when the user is not a recipient. Already-read rows
        are left untouched.
        """

        recipient = (
            self.session.query(NotificationRecipientModel)
            .filter(
                NotificationRecipientModel.notification_id == notification_id,
                NotificationRecipientModel.user_id == user_id,
            )
            .first()
        )
        if recipient is None:
            return False
        if not recipient.is_read:
            recipient.is_read = True
            recipient.read_at = now_in_app_naive_datetime()
            self.session.add(recipient)
            self.session.commit()
        return True

    def delete(self, notification_id: int) -> None:
        model = self.session.get(NotificationModel, notification_id)
        if model is None:
            msg = f"Notification with id {notification_id} not found"
            raise ValueError(msg)
        self.session.delete(model)
        self.session.commit()

    def delete_sent_by(self, user_id: int) -> int:
        ids = [
            notification_id
            for (notification_id,) in self.session.query(NotificationModel.id)
            .filter(NotificationModel.sender_id == user_id)
            .all()
        ]
        return self._delete_ids(ids)

    def remove_recipient(self, user_id: int) -> int:
        return (
            self.session.query(NotificationRecipientModel)
            .filter(NotificationRecipientModel.user_id == user_id)
            .delete(synchronize_session=False)
        )

    def delete_without_recipients(self) -> int:
        ids = [
            notification_id
            for (notification_id,) in self.session.query(NotificationModel.id)
            .filter(~NotificationModel.targets.any())
            .all()
        ]
        return self._delete_ids(ids)

    def _delete_ids(self, ids: list[int]) -> int:
        if not ids:
            return 0
        self.session.query(NotificationRecipientModel).filter(
            NotificationRecipientModel.notification_id.in_(ids)
        ).delete(synchronize_session=False)
        return (
            self.session.query(NotificationModel)
            .filter(NotificationModel.id.in_(ids))
            .delete(synchronize_session=False)
        )

    def _for_user_query(self, user_id: int, *, unread_only: bool):
        query = (
            self.session.query(NotificationModel)
            .join(
                NotificationRecipientModel,
                NotificationRecipientModel.notification_id == NotificationModel.id,
            )
            .filter(NotificationRecipientModel.user_id == user_id)
        )
        if unread_only:
            query = query.filter(NotificationRecipientModel.is_read.is_(False))
        return query

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            title=model.title,
            message=model.message,
            sender_id=model.sender_id,
            recipients=RecipientsMode(model.recipients),
            target_users=[target.user_id for target in model.targets],
            urgency_level=UrgencyLevel(model.urgency_level),
            related_to=RelatedTo(model.related_to),
            relation=reference_from_columns(model.notification_type, model.related_id),
            is_read={target.user_id: True for target in model.targets if target.is_read},
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["NotificationRepository"]
