"""Fan-out of domain events into stored notifications and live pushes."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, Union

from sqlalchemy.orm import Session

from app.domain.entities import (
    ROLE_STUDENT,
    Notification,
    NotificationRelation,
    NotificationSpec,
    RecipientsMode,
    RelatedTo,
    UrgencyLevel,
)
from app.infrastructure.notifications import serialize_notification
from app.infrastructure.repositories import UserRepository

from .create_notification import create_notification

logger = logging.getLogger(__name__)


class EventTag(str, Enum):
    NEW_NOTIFICATION = "NEW_NOTIFICATION"
    NEW_BLOG = "NEW_BLOG"
    BLOG_UPDATE = "BLOG_UPDATE"
    BLOG_STATUS_CHANGE = "BLOG_STATUS_CHANGE"
    NEW_COMMENT = "NEW_COMMENT"
    NEW_CONTEST = "NEW_CONTEST"
    CONTEST_UPDATE = "CONTEST_UPDATE"
    ACCOUNT_SUSPENDED = "ACCOUNT_SUSPENDED"
    ROLE_CHANGED = "ROLE_CHANGED"
    PAYMENT_SUCCESS = "PAYMENT_SUCCESS"


@dataclass(frozen=True)
class Explicit:
    """Deliver to exactly these users."""

    user_ids: Sequence[int]


@dataclass(frozen=True)
class Broadcast:
    """Deliver to every user holding ``role`` at dispatch time."""

    role: str


Audience = Union[Explicit, Broadcast]


@dataclass(frozen=True)
class NotificationEvent:
    tag: EventTag
    title: str
    message: str
    sender_id: int
    audience: Audience
    push_message: str | None = None
    urgency_level: UrgencyLevel = UrgencyLevel.INFO
    related_to: RelatedTo = RelatedTo.GENERAL
    relation: NotificationRelation | None = None
    optional: bool = False


class LivePush(Protocol):
    def send(self, user_id: int, event: str, message: str, data: Any) -> None:
        ...


class NotificationDispatcher:
    """Persist one notification per event and push it to every recipient.

    Storage errors propagate and nothing is pushed. Push errors are logged
    per recipient and never surface.
    """

    def __init__(self, session: Session, push: LivePush | None = None) -> None:
        self.session = session
        self._push = push

    def notify(self, event: NotificationEvent) -> Notification | None:
        spec = self._build_spec(event)
        if spec is None:
            logger.info("Skipping optional %s event: no recipients", event.tag.value)
            return None

        notification = create_notification(self.session, spec)
        logger.info(
            "Stored %s notification %s for %s recipient(s)",
            event.tag.value,
            notification.id,
            len(notification.target_users),
        )
        self._publish(event, notification)
        return notification

    def _build_spec(self, event: NotificationEvent) -> NotificationSpec | None:
        audience = event.audience
        if isinstance(audience, Broadcast) and audience.role == ROLE_STUDENT:
            recipients = RecipientsMode.ALL
            target_users = UserRepository(self.session).list_ids_by_role(ROLE_STUDENT)
        elif isinstance(audience, Broadcast):
            recipients = RecipientsMode.SPECIFIC
            target_users = UserRepository(self.session).list_ids_by_role(audience.role)
        else:
            recipients = RecipientsMode.SPECIFIC
            target_users = list(dict.fromkeys(audience.user_ids))

        if not target_users and event.optional:
            return None

        return NotificationSpec(
            sender_id=event.sender_id,
            title=event.title,
            message=event.message,
            recipients=recipients,
            target_users=target_users,
            urgency_level=event.urgency_level,
            related_to=event.related_to,
            relation=event.relation,
        )

    def _publish(self, event: NotificationEvent, notification: Notification) -> None:
        if self._push is None:
            return
        data = serialize_notification(notification)
        short_message = event.push_message or notification.title
        for user_id in notification.target_users:
            try:
                self._push.send(user_id, event.tag.value, short_message, data)
            except Exception:
                logger.warning(
                    "Dropped %s push for user %s", event.tag.value, user_id, exc_info=True
                )


__all__ = [
    "Audience",
    "Broadcast",
    "EventTag",
    "Explicit",
    "LivePush",
    "NotificationDispatcher",
    "NotificationEvent",
]
