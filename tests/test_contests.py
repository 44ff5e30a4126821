from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.application.use_cases.contests import (
    create_contest,
    get_contest,
    list_my_contests,
    register_for_contest,
    update_contest,
)
from app.domain.entities import (
    Contest,
    ContestRef,
    ContestStatus,
    ParticipantPaymentStatus,
    PaymentStatus,
    derive_status,
)
from app.domain.errors import (
    AlreadyRegisteredError,
    ContestFullError,
    InvalidSpecError,
    NotFoundError,
    RegistrationClosedError,
)
from app.infrastructure.repositories import (
    ContestRepository,
    NotificationRepository,
    UserRepository,
)
from app.utils import now_in_app_timezone

NOW = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)


def _contest(**overrides) -> Contest:
    values = {
        "id": 1,
        "title": "Robotics",
        "description": "Line follower race",
        "category": "robotics",
        "start_date": NOW + timedelta(days=1),
        "end_date": NOW + timedelta(days=2),
        "registration_deadline": NOW,
    }
    values.update(overrides)
    return Contest(**values)


@pytest.mark.parametrize(
    ("start_offset", "end_offset", "expected"),
    [
        (timedelta(hours=1), timedelta(days=1), ContestStatus.UPCOMING),
        (timedelta(0), timedelta(days=1), ContestStatus.ONGOING),
        (-timedelta(days=1), timedelta(0), ContestStatus.ONGOING),
        (-timedelta(days=2), -timedelta(seconds=1), ContestStatus.COMPLETED),
    ],
)
def test_derive_status_follows_the_schedule(start_offset, end_offset, expected):
    contest = _contest(start_date=NOW + start_offset, end_date=NOW + end_offset)

    assert derive_status(NOW, contest) is expected


def test_cancelled_contests_stay_cancelled():
    contest = _contest(
        start_date=NOW - timedelta(days=2),
        end_date=NOW - timedelta(days=1),
        status=ContestStatus.CANCELLED,
    )

    assert derive_status(NOW, contest) is ContestStatus.CANCELLED


def test_create_contest_announces_to_students(session, dispatcher, push, admin, student):
    now = now_in_app_timezone()

    contest = create_contest(
        session,
        dispatcher,
        creator=admin,
        title="Math Olympiad",
        description="Three hours of problems",
        category="math",
        start_date=now + timedelta(days=10),
        end_date=now + timedelta(days=10, hours=3),
        registration_deadline=now + timedelta(days=8),
    )

    assert contest.organizers == [admin.id]
    assert contest.status is ContestStatus.UPCOMING
    assert push.events_for(student.id) == ["NEW_CONTEST"]
    stored = NotificationRepository(session).list_for_user(student.id)
    assert stored[0].relation == ContestRef(contest.id)


def test_create_contest_rejects_inverted_schedule(session, dispatcher, admin):
    now = now_in_app_timezone()

    with pytest.raises(InvalidSpecError):
        create_contest(
            session,
            dispatcher,
            creator=admin,
            title="Backwards",
            description="Ends before it starts",
            category="misc",
            start_date=now + timedelta(days=2),
            end_date=now + timedelta(days=1),
            registration_deadline=now,
        )


def test_free_registration_is_completed_immediately(session, make_contest, student):
    contest = make_contest()

    result = register_for_contest(session, contest.id, user=student)

    assert result.payment_required is False
    assert result.payment_status is ParticipantPaymentStatus.COMPLETED
    participant = ContestRepository(session).get(contest.id).find_participant(student.id)
    assert participant.payment_status is ParticipantPaymentStatus.COMPLETED
    assert contest.id in UserRepository(session).get(student.id).contests


def test_last_slot_goes_to_the_first_student(session, make_contest, make_user):
    contest = make_contest(max_participants=1)
    first = make_user()
    second = make_user()

    register_for_contest(session, contest.id, user=first)
    with pytest.raises(ContestFullError):
        register_for_contest(session, contest.id, user=second)

    assert ContestRepository(session).get(contest.id).participant_count == 1


def test_registration_after_deadline_is_closed(session, make_contest, student):
    contest = make_contest(deadline_in=-timedelta(minutes=1))

    with pytest.raises(RegistrationClosedError):
        register_for_contest(session, contest.id, user=student)


def test_closed_takes_precedence_over_full(session, make_contest, make_user):
    contest = make_contest(max_participants=1)
    register_for_contest(session, contest.id, user=make_user())
    stored = ContestRepository(session).get(contest.id)
    stored.registration_deadline = now_in_app_timezone() - timedelta(hours=1)
    ContestRepository(session).update(stored)

    with pytest.raises(RegistrationClosedError):
        register_for_contest(session, contest.id, user=make_user())


def test_registering_twice_is_rejected(session, make_contest, student):
    contest = make_contest()
    register_for_contest(session, contest.id, user=student)

    with pytest.raises(AlreadyRegisteredError):
        register_for_contest(session, contest.id, user=student)


def test_unknown_contest(session, student):
    with pytest.raises(NotFoundError):
        register_for_contest(session, 999, user=student)


def test_paid_registration_creates_pending_payment(session, make_contest, student):
    contest = make_contest(entry_fee=Decimal("250.00"))

    result = register_for_contest(session, contest.id, user=student)

    assert result.payment_required is True
    assert result.payment.status is PaymentStatus.PENDING
    assert result.payment.amount == Decimal("250.00")
    assert result.payment.relation == ContestRef(contest.id)
    participant = ContestRepository(session).get(contest.id).find_participant(student.id)
    assert participant.payment_status is ParticipantPaymentStatus.PENDING
    assert participant.payment_id == result.payment.id


def test_contest_detail_reports_viewer_registration(session, make_contest, student):
    contest = make_contest(entry_fee=Decimal("10"))
    register_for_contest(session, contest.id, user=student)

    detail = get_contest(session, contest.id, viewer=student)
    anonymous = get_contest(session, contest.id)

    assert detail.is_registered is True
    assert detail.registration_status is ParticipantPaymentStatus.PENDING
    assert anonymous.is_registered is False


def test_my_contests_lists_registrations(session, make_contest, student):
    joined = make_contest(title="Joined")
    make_contest(title="Skipped")
    register_for_contest(session, joined.id, user=student)

    page = list_my_contests(session, student.id)

    assert page.total == 1
    assert page.items[0].contest.title == "Joined"
    assert page.items[0].participant.user_id == student.id


def test_update_notifies_participants_and_can_lift_the_limit(
    session, dispatcher, push, admin, make_contest, student
):
    contest = make_contest(max_participants=1)
    register_for_contest(session, contest.id, user=student)

    updated = update_contest(
        session, dispatcher, contest.id, editor=admin, location="Main hall", max_participants=0
    )

    assert updated.location == "Main hall"
    assert updated.max_participants is None
    assert push.events_for(student.id) == ["CONTEST_UPDATE"]


def test_update_without_participants_sends_nothing(session, dispatcher, push, admin, make_contest):
    contest = make_contest()

    update_contest(session, dispatcher, contest.id, editor=admin, title="Renamed")

    assert push.sent == []
