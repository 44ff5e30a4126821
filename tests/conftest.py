"""Shared fixtures: an in-memory database, users, contests and a recording push channel."""

from __future__ import annotations

import os
from datetime import timedelta
from decimal import Decimal

import pytest

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["RAZORPAY_KEY_ID"] = "rzp_test_key"
os.environ["RAZORPAY_KEY_SECRET"] = "rzp_test_secret"
os.environ["APP_TIMEZONE"] = "UTC"

from app.application.use_cases.notifications import NotificationDispatcher  # noqa: E402
from app.application.use_cases.users import create_user  # noqa: E402
from app.domain.entities import ROLE_ADMIN, ROLE_STUDENT, Contest  # noqa: E402
from app.infrastructure import models  # noqa: E402,F401
from app.infrastructure.database import Base, SessionLocal, engine  # noqa: E402
from app.infrastructure.repositories import ContestRepository  # noqa: E402
from app.utils import now_in_app_timezone  # noqa: E402


class RecordingPush:
    """Live push channel that remembers every delivery."""

    def __init__(self) -> None:
        self.sent: list[tuple[int, str, str, dict]] = []

    def send(self, user_id, event, message, data) -> None:
        self.sent.append((user_id, event, message, data))

    def events_for(self, user_id: int) -> list[str]:
        return [event for recipient, event, _, _ in self.sent if recipient == user_id]


@pytest.fixture(autouse=True)
def _schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def push() -> RecordingPush:
    return RecordingPush()


@pytest.fixture()
def dispatcher(session, push) -> NotificationDispatcher:
    return NotificationDispatcher(session, push)


@pytest.fixture()
def make_user(session):
    counter = {"value": 0}

    def _make_user(role: str = ROLE_STUDENT, *, name: str | None = None, password: str = "secret123"):
        counter["value"] += 1
        index = counter["value"]
        return create_user(
            session,
            name=name or f"{role.title()} {index}",
            email=f"{role}{index}@example.com",
            password=password,
            role=role,
        )

    return _make_user


@pytest.fixture()
def admin(make_user):
    return make_user(ROLE_ADMIN)


@pytest.fixture()
def student(make_user):
    return make_user(ROLE_STUDENT)


@pytest.fixture()
def make_contest(session, admin):
    def _make_contest(
        *,
        title: str = "Hackathon",
        entry_fee: Decimal = Decimal("0"),
        max_participants: int | None = None,
        deadline_in: timedelta = timedelta(days=5),
        starts_in: timedelta = timedelta(days=7),
        lasts: timedelta = timedelta(days=1),
    ) -> Contest:
        now = now_in_app_timezone()
        return ContestRepository(session).create(
            Contest(
                id=None,
                title=title,
                description="Build something in a day",
                category="coding",
                start_date=now + starts_in,
                end_date=now + starts_in + lasts,
                registration_deadline=now + deadline_in,
                entry_fee=entry_fee,
                max_participants=max_participants,
                organizers=[admin.id],
            )
        )

    return _make_contest


@pytest.fixture()
def anyio_backend():
    return "asyncio"
