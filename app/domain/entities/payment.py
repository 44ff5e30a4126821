"""Domain entity representing a payment attempt."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from .relation import PaymentRelation


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentPurpose(str, Enum):
    CONTEST = "contest"
    SUBSCRIPTION = "subscription"
    OTHER = "other"


_ALLOWED_TRANSITIONS: dict[PaymentStatus, frozenset[PaymentStatus]] = {
    PaymentStatus.PENDING: frozenset(
        {PaymentStatus.COMPLETED, PaymentStatus.FAILED, PaymentStatus.REFUNDED}
    ),
    PaymentStatus.COMPLETED: frozenset(),
    PaymentStatus.FAILED: frozenset(),
    PaymentStatus.REFUNDED: frozenset(),
}


def can_transition(current: PaymentStatus, target: PaymentStatus) -> bool:
    """Return whether a payment may move from ``current`` to ``target``."""

    return target in _ALLOWED_TRANSITIONS[current]


@dataclass
class Payment:
    """A charge correlated with an order at the payment provider."""

    id: int | None
    user_id: int | None
    amount: Decimal
    purpose: PaymentPurpose
    status: PaymentStatus = PaymentStatus.PENDING
    currency: str = "INR"
    relation: PaymentRelation | None = None
    payment_method: str = "razorpay"
    provider_order_id: str | None = None
    provider_payment_id: str | None = None
    provider_signature: str | None = None
    receipt: str | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_successful(self) -> bool:
        return self.status is PaymentStatus.COMPLETED


@dataclass(frozen=True)
class PaymentStats:
    total_revenue: Decimal
    completed_count: int
    pending_count: int


@dataclass(frozen=True)
class OrderSummary:
    """Provider order details handed back to the client for checkout."""

    order_id: str
    amount: Decimal
    currency: str
    receipt: str
    payment_id: int


__all__ = [
    "OrderSummary",
    "Payment",
    "PaymentPurpose",
    "PaymentStats",
    "PaymentStatus",
    "can_transition",
]
