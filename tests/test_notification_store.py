from __future__ import annotations

import pytest

from app.application.use_cases.notifications import (
    create_notification,
    list_notifications_for,
    mark_notification_read,
    purge_user_notifications,
)
from app.domain.entities import (
    ROLE_ADMIN,
    ContestRef,
    NotificationSpec,
    RecipientsMode,
    RelatedTo,
)
from app.domain.errors import ForbiddenError, InvalidSpecError, NotFoundError
from app.infrastructure.repositories import NotificationRepository


def _spec(sender_id: int, **overrides) -> NotificationSpec:
    values = {
        "sender_id": sender_id,
        "title": "Campus closed",
        "message": "The campus is closed on Friday.",
    }
    values.update(overrides)
    return NotificationSpec(**values)


def test_all_recipients_is_a_snapshot_of_current_students(session, admin, make_user):
    first = make_user()
    second = make_user()
    make_user(ROLE_ADMIN)

    notification = create_notification(session, _spec(admin.id))
    late_student = make_user()

    assert notification.recipients is RecipientsMode.ALL
    assert sorted(notification.target_users) == sorted([first.id, second.id])
    assert list_notifications_for(session, late_student.id).total == 0
    assert list_notifications_for(session, first.id).total == 1


def test_specific_recipients_require_a_target_list(session, admin):
    with pytest.raises(InvalidSpecError):
        create_notification(
            session, _spec(admin.id, recipients=RecipientsMode.SPECIFIC, target_users=[])
        )


def test_unknown_targets_are_rejected(session, admin, student):
    with pytest.raises(InvalidSpecError):
        create_notification(
            session,
            _spec(
                admin.id,
                recipients=RecipientsMode.SPECIFIC,
                target_users=[student.id, 9999],
            ),
        )
    assert NotificationRepository(session).count() == 0


def test_broadcast_without_students_is_rejected(session, admin):
    with pytest.raises(InvalidSpecError):
        create_notification(session, _spec(admin.id))


def test_relation_sets_related_to(session, admin, student):
    notification = create_notification(
        session,
        _spec(
            admin.id,
            recipients=RecipientsMode.SPECIFIC,
            target_users=[student.id, student.id],
            relation=ContestRef(7),
        ),
    )

    assert notification.target_users == [student.id]
    assert notification.related_to is RelatedTo.CONTEST
    assert NotificationRepository(session).get(notification.id).relation == ContestRef(7)


def test_mark_read_only_affects_the_reader(session, admin, make_user):
    reader = make_user()
    other = make_user()
    notification = create_notification(session, _spec(admin.id))

    view = mark_notification_read(session, notification.id, user_id=reader.id)
    again = mark_notification_read(session, notification.id, user_id=reader.id)

    assert view.is_read_by_me and again.is_read_by_me
    assert list_notifications_for(session, reader.id, unread_only=True).total == 0
    other_page = list_notifications_for(session, other.id)
    assert [item.is_read_by_me for item in other_page.items] == [False]


def test_mark_read_requires_being_a_recipient(session, admin, student):
    notification = create_notification(session, _spec(admin.id))

    with pytest.raises(ForbiddenError):
        mark_notification_read(session, notification.id, user_id=admin.id)
    with pytest.raises(NotFoundError):
        mark_notification_read(session, 4242, user_id=student.id)


def test_listing_is_paginated_newest_first(session, admin, student):
    for index in range(3):
        create_notification(session, _spec(admin.id, title=f"Notice {index}"))

    first_page = list_notifications_for(session, student.id, page=1, limit=2)
    second_page = list_notifications_for(session, student.id, page=2, limit=2)

    assert first_page.total == 3
    assert first_page.pages == 2
    assert [view.notification.title for view in first_page.items] == ["Notice 2", "Notice 1"]
    assert [view.notification.title for view in second_page.items] == ["Notice 0"]


def test_purge_removes_every_trace_of_the_user(session, admin, make_user):
    leaving = make_user()
    staying = make_user()
    sent_by_leaving = create_notification(
        session,
        _spec(leaving.id, recipients=RecipientsMode.SPECIFIC, target_users=[staying.id]),
    )
    shared = create_notification(session, _spec(admin.id))
    only_for_leaving = create_notification(
        session,
        _spec(admin.id, recipients=RecipientsMode.SPECIFIC, target_users=[leaving.id]),
    )

    purge_user_notifications(session, leaving.id)

    repository = NotificationRepository(session)
    assert repository.get(sent_by_leaving.id) is None
    assert repository.get(only_for_leaving.id) is None
    assert repository.get(shared.id).target_users == [staying.id]
