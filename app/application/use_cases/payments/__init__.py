"""Use cases for payment orders and reconciliation."""

from .create_payment_order import build_receipt, create_payment_order
from .get_payment import get_payment
from .list_payments import PaymentListing, list_all_payments, list_payment_history
from .verify_payment import verify_payment

__all__ = [
    "PaymentListing",
    "build_receipt",
    "create_payment_order",
    "get_payment",
    "list_all_payments",
    "list_payment_history",
    "verify_payment",
]
