"""Persistence layer for payments."""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.domain.entities import (
    Payment,
    PaymentPurpose,
    PaymentRelation,
    PaymentStats,
    PaymentStatus,
    reference_from_columns,
    reference_to_columns,
)
from app.infrastructure.models import PaymentModel
from app.utils import ensure_app_timezone


class PaymentRepository:
    """Provide CRUD operations for :class:`Payment` records."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, payment_id: int) -> Payment | None:
        model = self.session.get(PaymentModel, payment_id)
        return self._to_entity(model) if model else None

    def create(self, payment: Payment, *, commit: bool = True) -> Payment:
        """Insert ``payment``; without ``commit`` the row is only flushed."""

        model = PaymentModel()
        self._apply_entity_to_model(model, payment)
        self.session.add(model)
        if commit:
            self.session.commit()
            self.session.refresh(model)
        else:
            self.session.flush()
        return self._to_entity(model)

    def update(self, payment: Payment, *, commit: bool = True) -> Payment:
        model = self.session.get(PaymentModel, payment.id)
        if model is None:
            msg = f"Payment with id {payment.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, payment)
        self.session.add(model)
        if commit:
            self.session.commit()
            self.session.refresh(model)
        else:
            self.session.flush()
        return self._to_entity(model)

    def get_latest_pending(
        self, *, user_id: int, relation: PaymentRelation
    ) -> Payment | None:
        related_model, related_id = reference_to_columns(relation)
        model = (
            self.session.query(PaymentModel)
            .filter(
                PaymentModel.user_id == user_id,
                PaymentModel.related_model == related_model,
                PaymentModel.related_id == related_id,
                PaymentModel.status == PaymentStatus.PENDING.value,
            )
            .order_by(PaymentModel.created_at.desc(), PaymentModel.id.desc())
            .first()
        )
        return self._to_entity(model) if model else None

    def list(
        self,
        *,
        user_id: int | None = None,
        status: str | None = None,
        purpose: str | None = None,
        skip: int = 0,
        limit: int | None = 10,
    ) -> Sequence[Payment]:
        query = self._filtered_query(user_id=user_id, status=status, purpose=purpose)
        query = query.order_by(PaymentModel.created_at.desc(), PaymentModel.id.desc())
        query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count(
        self,
        *,
        user_id: int | None = None,
        status: str | None = None,
        purpose: str | None = None,
    ) -> int:
        return self._filtered_query(user_id=user_id, status=status, purpose=purpose).count()

    def stats(self) -> PaymentStats:
        total_revenue = (
            self.session.query(func.coalesce(func.sum(PaymentModel.amount), 0))
            .filter(PaymentModel.status == PaymentStatus.COMPLETED.value)
            .scalar()
        )
        return PaymentStats(
            total_revenue=Decimal(total_revenue or 0),
            completed_count=self.count(status=PaymentStatus.COMPLETED.value),
            pending_count=self.count(status=PaymentStatus.PENDING.value),
        )

    def _filtered_query(
        self,
        *,
        user_id: int | None,
        status: str | None,
        purpose: str | None,
    ):
        query = self.session.query(PaymentModel)
        if user_id is not None:
            query = query.filter(PaymentModel.user_id == user_id)
        if status:
            query = query.filter(PaymentModel.status == status)
        if purpose:
            query = query.filter(PaymentModel.purpose == purpose)
        return query

    @staticmethod
    def _apply_entity_to_model(model: PaymentModel, payment: Payment) -> None:
        model.user_id = payment.user_id
        model.amount = payment.amount
        model.currency = payment.currency
        model.purpose = payment.purpose.value
        model.related_model, model.related_id = reference_to_columns(payment.relation)
        model.status = payment.status.value
        model.payment_method = payment.payment_method
        model.provider_order_id = payment.provider_order_id
        model.provider_payment_id = payment.provider_payment_id
        model.provider_signature = payment.provider_signature
        model.receipt = payment.receipt
        model.notes = payment.notes

    @staticmethod
    def _to_entity(model: PaymentModel) -> Payment:
        return Payment(
            id=model.id,
            user_id=model.user_id,
            amount=Decimal(model.amount),
            purpose=PaymentPurpose(model.purpose),
            status=PaymentStatus(model.status),
            currency=model.currency,
            relation=reference_from_columns(model.related_model, model.related_id),
            payment_method=model.payment_method,
            provider_order_id=model.provider_order_id,
            provider_payment_id=model.provider_payment_id,
            provider_signature=model.provider_signature,
            receipt=model.receipt,
            notes=model.notes,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["PaymentRepository"]
