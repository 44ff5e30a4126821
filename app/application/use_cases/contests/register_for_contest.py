"""Use case for registering a student in a contest."""

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.domain.entities import (
    ContestRef,
    Participant,
    ParticipantPaymentStatus,
    Payment,
    PaymentPurpose,
    PaymentStatus,
    User,
)
from app.domain.errors import (
    AlreadyRegisteredError,
    ContestFullError,
    NotFoundError,
    RegistrationClosedError,
)
from app.infrastructure.repositories import (
    ContestRepository,
    PaymentRepository,
    UserRepository,
)
from app.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegistrationResult:
    contest_id: int
    payment_required: bool
    payment_status: ParticipantPaymentStatus
    payment: Payment | None = None


def register_for_contest(
    session: Session, contest_id: int, *, user: User
) -> RegistrationResult:
    """Register ``user`` in the contest.

    The contest row stays locked until the registration is committed, so two
    requests cannot both take the last free slot. For paid contests the
    pending payment and the participant entry are committed together.
    """

    contest_repository = ContestRepository(session)
    contest = contest_repository.get(contest_id, for_update=True)
    if contest is None:
        session.rollback()
        raise NotFoundError("Contest not found")

    now = now_in_app_timezone()
    if not contest.is_registration_open(now):
        session.rollback()
        raise RegistrationClosedError("Registration for this contest is closed")
    if contest.is_full():
        session.rollback()
        raise ContestFullError("This contest has reached maximum participants")
    if contest.find_participant(user.id) is not None:
        session.rollback()
        raise AlreadyRegisteredError("You are already registered for this contest")

    payment: Payment | None = None
    try:
        if contest.requires_payment:
            payment = PaymentRepository(session).create(
                Payment(
                    id=None,
                    user_id=user.id,
                    amount=contest.entry_fee,
                    purpose=PaymentPurpose.CONTEST,
                    status=PaymentStatus.PENDING,
                    currency=get_settings().payment_currency,
                    relation=ContestRef(contest.id),
                ),
                commit=False,
            )
            payment_status = ParticipantPaymentStatus.PENDING
        else:
            payment_status = ParticipantPaymentStatus.COMPLETED

        contest_repository.add_participant(
            contest.id,
            Participant(
                user_id=user.id,
                registered_at=now,
                payment_status=payment_status,
                payment_id=payment.id if payment else None,
            ),
            commit=False,
        )
        UserRepository(session).add_contest(user.id, contest.id, commit=False)
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        raise AlreadyRegisteredError(
            "You are already registered for this contest"
        ) from exc
    except Exception:
        session.rollback()
        raise

    logger.info(
        "User %s registered for contest %s (payment %s)",
        user.id,
        contest.id,
        payment_status.value,
    )
    return RegistrationResult(
        contest_id=contest.id,
        payment_required=contest.requires_payment,
        payment_status=payment_status,
        payment=PaymentRepository(session).get(payment.id) if payment else None,
    )
