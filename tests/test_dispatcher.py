from __future__ import annotations

import pytest

from app.application.use_cases.notifications import (
    Broadcast,
    EventTag,
    Explicit,
    NotificationDispatcher,
    NotificationEvent,
)
from app.domain.entities import ROLE_ADMIN, ROLE_STUDENT, BlogRef, RecipientsMode
from app.domain.errors import InvalidSpecError
from app.infrastructure.repositories import NotificationRepository


def _event(sender_id: int, audience, **overrides) -> NotificationEvent:
    values = {
        "tag": EventTag.NEW_NOTIFICATION,
        "title": "Heads up",
        "message": "Something happened",
        "sender_id": sender_id,
        "audience": audience,
    }
    values.update(overrides)
    return NotificationEvent(**values)


def test_explicit_audience_is_stored_and_pushed(dispatcher, push, admin, make_user):
    first = make_user()
    second = make_user()

    notification = dispatcher.notify(
        _event(
            admin.id,
            Explicit([first.id, second.id]),
            tag=EventTag.BLOG_STATUS_CHANGE,
            push_message="Short version",
            relation=BlogRef(3),
        )
    )

    assert notification.recipients is RecipientsMode.SPECIFIC
    assert notification.target_users == [first.id, second.id]
    assert [(user_id, event, message) for user_id, event, message, _ in push.sent] == [
        (first.id, "BLOG_STATUS_CHANGE", "Short version"),
        (second.id, "BLOG_STATUS_CHANGE", "Short version"),
    ]
    payload = push.sent[0][3]
    assert payload["id"] == notification.id
    assert payload["related_to"] == "blog"
    assert payload["notification_type"] == "Blog"


def test_student_broadcast_is_stored_as_all(dispatcher, admin, make_user):
    students = [make_user(), make_user()]

    notification = dispatcher.notify(_event(admin.id, Broadcast(ROLE_STUDENT)))

    assert notification.recipients is RecipientsMode.ALL
    assert sorted(notification.target_users) == sorted(student.id for student in students)


def test_admin_broadcast_targets_admins(dispatcher, admin, make_user, student):
    other_admin = make_user(ROLE_ADMIN)

    notification = dispatcher.notify(_event(student.id, Broadcast(ROLE_ADMIN)))

    assert notification.recipients is RecipientsMode.SPECIFIC
    assert sorted(notification.target_users) == sorted([admin.id, other_admin.id])


def test_optional_event_without_audience_is_skipped(session, dispatcher, push, admin):
    result = dispatcher.notify(_event(admin.id, Broadcast(ROLE_STUDENT), optional=True))

    assert result is None
    assert push.sent == []
    assert NotificationRepository(session).count() == 0


def test_push_failures_do_not_undo_the_notification(session, admin, make_user):
    reachable = make_user()
    unreachable = make_user()
    delivered = []

    class FlakyPush:
        def send(self, user_id, event, message, data):
            if user_id == unreachable.id:
                raise RuntimeError("socket closed")
            delivered.append(user_id)

    dispatcher = NotificationDispatcher(session, FlakyPush())
    notification = dispatcher.notify(
        _event(admin.id, Explicit([unreachable.id, reachable.id]))
    )

    assert delivered == [reachable.id]
    assert NotificationRepository(session).get(notification.id) is not None


def test_storage_failure_pushes_nothing(dispatcher, push, admin, student):
    with pytest.raises(InvalidSpecError):
        dispatcher.notify(_event(admin.id, Explicit([student.id, 12345])))

    assert push.sent == []


def test_dispatcher_without_push_channel_only_stores(session, admin, student):
    notification = NotificationDispatcher(session).notify(
        _event(admin.id, Explicit([student.id]))
    )

    assert NotificationRepository(session).get(notification.id).target_users == [student.id]
