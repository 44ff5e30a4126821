"""Domain entities describing fan-out notifications."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Sequence

from .relation import BlogRef, ContestRef, NotificationRelation, PaymentRef


class RecipientsMode(str, Enum):
    ALL = "all"
    SPECIFIC = "specific"


class UrgencyLevel(str, Enum):
    INFO = "info"
    IMPORTANT = "important"
    URGENT = "urgent"


class RelatedTo(str, Enum):
    BLOG = "blog"
    CONTEST = "contest"
    PAYMENT = "payment"
    ACCOUNT = "account"
    GENERAL = "general"


_RELATION_KINDS: dict[type, RelatedTo] = {
    BlogRef: RelatedTo.BLOG,
    ContestRef: RelatedTo.CONTEST,
    PaymentRef: RelatedTo.PAYMENT,
}


def related_to_for(relation: NotificationRelation | None, default: RelatedTo) -> RelatedTo:
    """Return the ``relatedTo`` tag implied by ``relation``."""

    if relation is None:
        return default
    return _RELATION_KINDS[type(relation)]


@dataclass
class Notification:
    """A message addressed to a snapshot of recipients."""

    id: int | None
    title: str
    message: str
    sender_id: int
    recipients: RecipientsMode
    target_users: list[int]
    urgency_level: UrgencyLevel = UrgencyLevel.INFO
    related_to: RelatedTo = RelatedTo.GENERAL
    relation: NotificationRelation | None = None
    is_read: dict[int, bool] = field(default_factory=dict)
    created_at: datetime | None = None

    def is_target(self, user_id: int) -> bool:
        return user_id in self.target_users

    def is_read_by(self, user_id: int) -> bool:
        """Return whether ``user_id`` has read the notification."""

        return self.is_read.get(user_id, False)


@dataclass(frozen=True)
class NotificationSpec:
    """Input accepted by the notification store when creating records.

    ``target_users`` is required for ``SPECIFIC`` delivery. For ``ALL`` it
    may carry a student snapshot already taken by the caller; otherwise the
    store takes it.
    """

    sender_id: int
    title: str
    message: str
    recipients: RecipientsMode = RecipientsMode.ALL
    target_users: Sequence[int] | None = None
    urgency_level: UrgencyLevel = UrgencyLevel.INFO
    related_to: RelatedTo = RelatedTo.GENERAL
    relation: NotificationRelation | None = None


@dataclass(frozen=True)
class NotificationView:
    """A notification as seen by one of its recipients."""

    notification: Notification
    is_read_by_me: bool


__all__ = [
    "Notification",
    "NotificationSpec",
    "NotificationView",
    "RecipientsMode",
    "RelatedTo",
    "UrgencyLevel",
    "related_to_for",
]
