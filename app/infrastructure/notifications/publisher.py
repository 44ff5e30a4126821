"""Utility helpers to push notifications to websocket subscribers."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from anyio import from_thread

from app.domain.entities import Notification

from .manager import SessionRegistry

logger = logging.getLogger(__name__)


class LivePushPublisher:
    """Deliver live events to the sessions held by a :class:`SessionRegistry`.

    Delivery is best-effort: failures are logged and never reach the caller,
    so a persisted notification is not rolled back because a push failed.
    """

    def __init__(self, registry: SessionRegistry) -> None:
        self._registry = registry
        self._pending: set[asyncio.Task] = set()

    def send(self, user_id: int, event: str, message: str, data: Any) -> None:
        """Push ``{"type": "notification", ...}`` to every session of ``user_id``."""

        payload = {
            "type": "notification",
            "event": event,
            "message": message,
            "data": data,
        }
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._send_from_worker_thread(user_id, payload)
        else:
            task = loop.create_task(self._registry.send_to_user(user_id, payload))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)
            task.add_done_callback(lambda done: _log_task_failure(done, user_id))

    def _send_from_worker_thread(self, user_id: int, payload: dict[str, Any]) -> None:
        try:
            from_thread.run(self._registry.send_to_user, user_id, payload)
        except Exception:
            logger.warning(
                "Live push to user %s could not be delivered", user_id, exc_info=True
            )


def _log_task_failure(task: asyncio.Task, user_id: int) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.warning(
            "Live push to user %s could not be delivered", user_id, exc_info=exc
        )


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the websocket payload representation for ``notification``."""

    relation = notification.relation
    return {
        "id": notification.id,
        "title": notification.title,
        "message": notification.message,
        "sender_id": notification.sender_id,
        "recipients": notification.recipients.value,
        "target_users": list(notification.target_users),
        "urgency_level": notification.urgency_level.value,
        "related_to": notification.related_to.value,
        "related_id": relation.id if relation else None,
        "notification_type": relation.model if relation else None,
        "created_at": notification.created_at.isoformat()
        if notification.created_at
        else None,
    }


__all__ = ["LivePushPublisher", "serialize_notification"]
