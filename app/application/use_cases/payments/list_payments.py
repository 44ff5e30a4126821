"""Use cases for listing payments."""

from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.domain.entities import Page, Payment, PaymentStats, page_offset
from app.infrastructure.repositories import PaymentRepository


@dataclass(frozen=True)
class PaymentListing:
    page: Page[Payment]
    stats: PaymentStats


def list_payment_history(
    session: Session,
    user_id: int,
    *,
    status: str | None = None,
    page: int = 1,
    limit: int = 10,
) -> Page[Payment]:
    repository = PaymentRepository(session)
    return Page(
        items=list(
            repository.list(
                user_id=user_id,
                status=status,
                skip=page_offset(page, limit),
                limit=limit,
            )
        ),
        total=repository.count(user_id=user_id, status=status),
        page=page,
        limit=limit,
    )


def list_all_payments(
    session: Session,
    *,
    status: str | None = None,
    purpose: str | None = None,
    user_id: int | None = None,
    page: int = 1,
    limit: int = 10,
) -> PaymentListing:
    """Return every payment matching the filters plus global revenue figures."""

    repository = PaymentRepository(session)
    items = repository.list(
        user_id=user_id,
        status=status,
        purpose=purpose,
        skip=page_offset(page, limit),
        limit=limit,
    )
    return PaymentListing(
        page=Page(
            items=list(items),
            total=repository.count(user_id=user_id, status=status, purpose=purpose),
            page=page,
            limit=limit,
        ),
        stats=repository.stats(),
    )
