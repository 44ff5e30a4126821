"""Use case for retrieving a payment."""

from sqlalchemy.orm import Session

from app.domain.entities import Payment, User
from app.domain.errors import ForbiddenError, NotFoundError
from app.infrastructure.repositories import PaymentRepository


def get_payment(session: Session, payment_id: int, *, viewer: User) -> Payment:
    """Return the payment when ``viewer`` owns it or is an administrator."""

    payment = PaymentRepository(session).get(payment_id)
    if payment is None:
        raise NotFoundError("Payment not found")
    if payment.user_id != viewer.id and not viewer.is_admin():
        raise ForbiddenError("Not authorized to view this payment")
    return payment
