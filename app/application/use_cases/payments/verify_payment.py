"""Use case for confirming a payment reported by the checkout."""

import logging
from dataclasses import replace

from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    NotificationDispatcher,
    notify_payment_success,
)
from app.domain.entities import (
    ContestRef,
    ParticipantPaymentStatus,
    Payment,
    PaymentPurpose,
    PaymentStatus,
    User,
    can_transition,
)
from app.domain.errors import (
    ConflictError,
    ForbiddenError,
    InvalidSignatureError,
    InvalidSpecError,
    NotFoundError,
)
from app.infrastructure.payment_gateway import RazorpayGateway
from app.infrastructure.repositories import ContestRepository, PaymentRepository

logger = logging.getLogger(__name__)


def verify_payment(
    session: Session,
    gateway: RazorpayGateway,
    dispatcher: NotificationDispatcher,
    *,
    user: User,
    provider_payment_id: str,
    provider_order_id: str,
    provider_signature: str,
    payment_id: int,
) -> Payment:
    """Mark the payment completed once the provider signature checks out.

    A forged signature is rejected before anything is read or written.
    Replaying a successful verification returns the stored payment.
    """

    if not gateway.verify_signature(
        order_id=provider_order_id,
        payment_id=provider_payment_id,
        signature=provider_signature,
    ):
        logger.warning("Rejected payment signature for payment %s", payment_id)
        raise InvalidSignatureError("Invalid payment signature")

    repository = PaymentRepository(session)
    payment = repository.get(payment_id)
    if payment is None:
        raise NotFoundError("Payment not found")
    if payment.user_id != user.id:
        raise ForbiddenError("Not authorized to verify this payment")

    if payment.status is PaymentStatus.COMPLETED:
        if payment.provider_payment_id == provider_payment_id:
            return payment
        raise ConflictError("Payment has already been completed")
    if not can_transition(payment.status, PaymentStatus.COMPLETED):
        raise ConflictError(f"Payment is already {payment.status.value}")
    if not payment.provider_order_id:
        raise InvalidSpecError("No order was created for this payment")
    if payment.provider_order_id != provider_order_id:
        raise InvalidSpecError("The order does not belong to this payment")

    completed = replace(
        payment,
        status=PaymentStatus.COMPLETED,
        provider_order_id=provider_order_id,
        provider_payment_id=provider_payment_id,
        provider_signature=provider_signature,
    )
    try:
        completed = repository.update(completed, commit=False)
        if completed.purpose is PaymentPurpose.CONTEST and isinstance(
            completed.relation, ContestRef
        ):
            updated = ContestRepository(session).update_participant_payment(
                completed.relation.id,
                user.id,
                payment_status=ParticipantPaymentStatus.COMPLETED,
                payment_id=completed.id,
                commit=False,
            )
            if not updated:
                logger.info(
                    "No participant of contest %s matches payment %s",
                    completed.relation.id,
                    completed.id,
                )
        session.commit()
    except Exception:
        session.rollback()
        raise

    logger.info("Payment %s completed for user %s", completed.id, user.id)
    notify_payment_success(dispatcher, completed)
    return repository.get(completed.id)
