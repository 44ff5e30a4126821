"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from app.domain.entities import RecipientsMode, RelatedTo, UrgencyLevel

from .common import PaginationRead


class NotificationCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1)
    recipients: RecipientsMode = RecipientsMode.ALL
    target_users: list[int] | None = None
    urgency_level: UrgencyLevel = UrgencyLevel.INFO
    related_to: RelatedTo = RelatedTo.GENERAL
    related_id: int | None = None


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: int
    title: str
    message: str
    sender_id: int
    recipients: RecipientsMode
    target_users: list[int]
    urgency_level: UrgencyLevel
    related_to: RelatedTo
    related_id: int | None = None
    notification_type: str | None = None
    created_at: datetime | None
    is_read_by_me: bool | None = None


class NotificationListResponse(BaseModel):
    notifications: list[NotificationRead]
    pagination: PaginationRead


class NotificationCreatedResponse(BaseModel):
    message: str
    notification: NotificationRead


__all__ = [
    "NotificationCreate",
    "NotificationCreatedResponse",
    "NotificationListResponse",
    "NotificationRead",
]
