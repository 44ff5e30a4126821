"""Use case for opening a provider order for a payment."""

import logging
import secrets
from dataclasses import replace
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy.orm import Session

from app.config import get_settings
from app.domain.entities import (
    ContestRef,
    OrderSummary,
    Payment,
    PaymentPurpose,
    PaymentRelation,
    PaymentStatus,
    User,
    UserRef,
)
from app.domain.errors import InvalidSpecError, NotFoundError, UpstreamFailureError
from app.infrastructure.payment_gateway import PaymentGatewayError, RazorpayGateway
from app.infrastructure.repositories import (
    ContestRepository,
    PaymentRepository,
    UserRepository,
)
from app.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

_MINOR_UNITS = Decimal("100")


def create_payment_order(
    session: Session,
    gateway: RazorpayGateway,
    *,
    user: User,
    amount: Decimal,
    purpose: PaymentPurpose | str | None,
    relation: PaymentRelation | None = None,
) -> OrderSummary:
    """Create a provider order and the pending payment that tracks it.

    Nothing is stored when the provider call fails. A contest payment reuses
    the pending payment created at registration time, and must charge its amount.
    """

    amount = Decimal(str(amount)) if amount is not None else Decimal("0")
    if amount <= 0:
        raise InvalidSpecError("Valid amount is required")
    if not purpose:
        raise InvalidSpecError("Purpose is required")
    try:
        purpose = PaymentPurpose(purpose)
    except ValueError as exc:
        raise InvalidSpecError(f"Unknown payment purpose '{purpose}'") from exc

    _ensure_related_exists(session, relation)

    repository = PaymentRepository(session)
    existing = None
    if purpose is PaymentPurpose.CONTEST and isinstance(relation, ContestRef):
        existing = repository.get_latest_pending(user_id=user.id, relation=relation)
    if existing is not None and existing.amount != amount:
        raise InvalidSpecError(
            f"Amount must match the pending registration payment of {existing.amount}"
        )

    currency = get_settings().payment_currency
    receipt = build_receipt(user.id)
    amount_minor = int((amount * _MINOR_UNITS).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    try:
        order = gateway.create_order(
            amount_minor=amount_minor, currency=currency, receipt=receipt
        )
    except PaymentGatewayError as exc:
        logger.warning("Payment order for user %s failed: %s", user.id, exc)
        raise UpstreamFailureError("The payment provider could not create the order") from exc

    if existing is not None:
        payment = repository.update(
            replace(
                existing,
                currency=currency,
                provider_order_id=order["id"],
                receipt=receipt,
            )
        )
    else:
        payment = repository.create(
            Payment(
                id=None,
                user_id=user.id,
                amount=amount,
                purpose=purpose,
                status=PaymentStatus.PENDING,
                currency=currency,
                relation=relation,
                provider_order_id=order["id"],
                receipt=receipt,
            )
        )

    order_amount = order.get("amount")
    return OrderSummary(
        order_id=order["id"],
        amount=(Decimal(order_amount) / _MINOR_UNITS) if order_amount is not None else amount,
        currency=order.get("currency") or currency,
        receipt=order.get("receipt") or receipt,
        payment_id=payment.id,
    )


def build_receipt(user_id: int) -> str:
    """Return a unique receipt id; the provider caps receipts at 40 characters."""

    millis = int(now_in_app_timezone().timestamp() * 1000)
    return f"rcpt_{user_id}_{millis}_{secrets.token_hex(3)}"[:40]


def _ensure_related_exists(session: Session, relation: PaymentRelation | None) -> None:
    if isinstance(relation, ContestRef):
        if not ContestRepository(session).exists(relation.id):
            raise NotFoundError("Contest not found")
    elif isinstance(relation, UserRef):
        if UserRepository(session).get(relation.id) is None:
            raise NotFoundError("User not found")
