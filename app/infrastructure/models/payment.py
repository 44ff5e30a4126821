"""SQLAlchemy model for payments."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class PaymentModel(Base):
    """Database representation of a payment attempt."""

    __tablename__ = "payment"
    __table_args__ = (
        CheckConstraint(
            "(related_id IS NULL) = (related_model IS NULL)",
            name="ck_payment_relation_pair",
        ),
        Index("ix_payment_user_status", "user_id", "status"),
        Index("ix_payment_related", "related_id", "related_model"),
    )

    id = Column(Integer, primary_key=True, index=True)
    # Payments outlive the account that made them.
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="SET NULL"), nullable=True
    )
    amount = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="INR")
    purpose = Column(String(20), nullable=False)
    related_id = Column(Integer, nullable=True)
    related_model = Column(String(20), nullable=True)
    status = Column(String(20), nullable=False, default="pending")
    payment_method = Column(String(30), nullable=False, default="razorpay")
    provider_order_id = Column(String(100), nullable=True, index=True)
    provider_payment_id = Column(String(100), nullable=True)
    provider_signature = Column(String(255), nullable=True)
    receipt = Column(String(40), nullable=True, unique=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime, nullable=True, onupdate=now_in_app_naive_datetime)


__all__ = ["PaymentModel"]
