"""Notification store operations and domain event dispatch."""

from .create_notification import create_notification
from .delete_notification import delete_notification
from .dispatcher import (
    Audience,
    Broadcast,
    EventTag,
    Explicit,
    LivePush,
    NotificationDispatcher,
    NotificationEvent,
)
from .events import (
    announce,
    notify_account_suspended,
    notify_blog_resubmitted,
    notify_blog_status_changed,
    notify_blog_submitted,
    notify_contest_created,
    notify_contest_updated,
    notify_new_comment,
    notify_payment_success,
    notify_role_changed,
)
from .list_notifications import list_all_notifications, list_notifications_for
from .mark_notification_read import mark_notification_read
from .purge_user_notifications import purge_user_notifications

__all__ = [
    "Audience",
    "Broadcast",
    "EventTag",
    "Explicit",
    "LivePush",
    "NotificationDispatcher",
    "NotificationEvent",
    "announce",
    "create_notification",
    "delete_notification",
    "list_all_notifications",
    "list_notifications_for",
    "mark_notification_read",
    "notify_account_suspended",
    "notify_blog_resubmitted",
    "notify_blog_status_changed",
    "notify_blog_submitted",
    "notify_contest_created",
    "notify_contest_updated",
    "notify_new_comment",
    "notify_payment_success",
    "notify_role_changed",
    "purge_user_notifications",
]
