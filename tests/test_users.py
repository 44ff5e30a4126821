from __future__ import annotations

from decimal import Decimal

import pytest

from app.application.use_cases.blogs import add_comment, change_blog_status, create_blog
from app.application.use_cases.contests import register_for_contest
from app.application.use_cases.notifications import create_notification
from app.application.use_cases.users import (
    AuthenticationStatus,
    authenticate_user,
    delete_user,
    get_platform_stats,
    get_user_activity,
    list_users,
    make_admin,
    register_user,
    update_profile,
    update_user,
)
from app.domain.entities import ROLE_ADMIN, ROLE_STUDENT, NotificationSpec
from app.domain.errors import ConflictError, InvalidSpecError, NotFoundError
from app.infrastructure.repositories import (
    BlogRepository,
    ContestRepository,
    NotificationRepository,
    PaymentRepository,
    UserRepository,
)


def test_self_registration_always_creates_students(session):
    user = register_user(
        session, name="  Ada  ", email="ADA@Example.com", password="secret123", year="2nd"
    )

    assert user.role == ROLE_STUDENT
    assert user.name == "Ada"
    assert user.email == "ada@example.com"
    with pytest.raises(ConflictError):
        register_user(session, name="Ada", email="ada@example.com", password="other")


def test_authentication_outcomes(session, dispatcher, admin, make_user):
    user = make_user(password="right-password")

    assert authenticate_user(session, user.email, "wrong")[1] is AuthenticationStatus.INVALID_CREDENTIALS
    assert authenticate_user(session, "nobody@example.com", "x")[1] is AuthenticationStatus.INVALID_CREDENTIALS
    assert authenticate_user(session, user.email, "right-password")[1] is AuthenticationStatus.SUCCESS

    update_user(session, dispatcher, user_id=user.id, admin=admin, is_active=False)
    assert authenticate_user(session, user.email, "right-password")[1] is AuthenticationStatus.SUSPENDED
    assert authenticate_user(session, user.email, "wrong")[1] is AuthenticationStatus.INVALID_CREDENTIALS
    assert authenticate_user(session, f" {user.email.upper()} ", "right-password")[0].id == user.id


def test_suspension_notifies_only_on_transition(session, dispatcher, push, admin, student):
    update_user(session, dispatcher, user_id=student.id, admin=admin, is_active=False)
    update_user(session, dispatcher, user_id=student.id, admin=admin, is_active=False)
    update_user(session, dispatcher, user_id=student.id, admin=admin, department="Physics")

    assert push.events_for(student.id) == ["ACCOUNT_SUSPENDED"]
    assert UserRepository(session).get(student.id).department == "Physics"


def test_update_rejects_taken_email(session, dispatcher, admin, student):
    with pytest.raises(ConflictError):
        update_user(session, dispatcher, user_id=student.id, admin=admin, email=admin.email)


def test_make_admin(session, dispatcher, push, admin, student):
    promoted = make_admin(session, dispatcher, user_id=student.id, admin=admin)

    assert promoted.role == ROLE_ADMIN
    assert push.events_for(student.id) == ["ROLE_CHANGED"]
    with pytest.raises(ConflictError):
        make_admin(session, dispatcher, user_id=student.id, admin=admin)


def test_profile_update_keeps_role(session, student):
    updated = update_profile(session, user=student, bio="Likes compilers", year="3rd")

    assert updated.bio == "Likes compilers"
    assert updated.year == "3rd"
    assert updated.role == ROLE_STUDENT
    with pytest.raises(InvalidSpecError):
        update_profile(session, user=student, year="5th")


def test_admins_cannot_delete_themselves(session, admin):
    with pytest.raises(InvalidSpecError):
        delete_user(session, admin.id, admin=admin)
    with pytest.raises(NotFoundError):
        delete_user(session, 777, admin=admin)


def test_deleting_a_user_removes_their_content(
    session, dispatcher, admin, make_contest, make_user
):
    leaving = make_user()
    staying = make_user()
    blog = create_blog(
        session, dispatcher, author=leaving, title="Farewell", content="Bye", tags="a, b"
    )
    contest = make_contest(entry_fee=Decimal("20"))
    registration = register_for_contest(session, contest.id, user=leaving)
    kept_blog = create_blog(
        session, dispatcher, author=staying, title="Hello", content="Hi", tags=None
    )
    change_blog_status(session, dispatcher, kept_blog.id, reviewer=admin, status="approved")
    add_comment(session, dispatcher, kept_blog.id, user=leaving, text="Nice post")
    announcement = create_notification(
        session, NotificationSpec(sender_id=admin.id, title="Hi", message="All students")
    )

    delete_user(session, leaving.id, admin=admin)

    assert UserRepository(session).get(leaving.id) is None
    assert BlogRepository(session).get(blog.id) is None
    assert BlogRepository(session).get(kept_blog.id).comments == []
    assert ContestRepository(session).get(contest.id).find_participant(leaving.id) is None
    payment = PaymentRepository(session).get(registration.payment.id)
    assert payment is not None and payment.user_id is None
    notifications = NotificationRepository(session)
    assert notifications.get(announcement.id).target_users == [staying.id]
    assert all(
        leaving.id not in notification.target_users
        for notification in notifications.list(limit=None)
    )


def test_listing_and_statistics(session, dispatcher, admin, make_user):
    first = make_user(name="Grace Hopper")
    make_user(name="Alan Turing")
    update_user(session, dispatcher, user_id=first.id, admin=admin, is_active=False)
    create_blog(session, dispatcher, author=first, title="Cobol", content="Still here")

    listing = list_users(session, search="grace")
    stats = get_platform_stats(session)
    activity = get_user_activity(session, first.id)

    assert [user.id for user in listing.page.items] == [first.id]
    assert listing.stats.total_students == 2
    assert listing.stats.inactive_users == 1
    assert stats.total_users == 3
    assert stats.admins == 1
    assert stats.pending_blogs == 1
    assert stats.recent_registrations == 3
    assert activity.total_blogs == 1
    assert activity.pending_blogs == 1
    assert activity.registered_contests == 0
