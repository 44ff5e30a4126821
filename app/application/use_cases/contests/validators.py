"""Common validation helpers for contest use cases."""

from datetime import datetime
from decimal import Decimal

from app.domain.errors import InvalidSpecError


def ensure_valid_schedule(
    start_date: datetime, end_date: datetime, registration_deadline: datetime
) -> None:
    if start_date > end_date:
        raise InvalidSpecError("The start date must not be after the end date")
    if registration_deadline > end_date:
        raise InvalidSpecError("The registration deadline must not be after the end date")


def ensure_valid_fee(entry_fee: Decimal) -> Decimal:
    fee = Decimal(entry_fee)
    if fee < 0:
        raise InvalidSpecError("The entry fee cannot be negative")
    return fee


def ensure_valid_capacity(max_participants: int | None) -> int | None:
    if max_participants is not None and max_participants < 1:
        raise InvalidSpecError("The participant limit must be at least 1")
    return max_participants
