"""Payment schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.domain.entities import PaymentPurpose, PaymentStatus

from .common import PaginationRead


class PaymentRead(BaseModel):
    id: int
    user_id: int | None
    amount: Decimal
    currency: str
    purpose: PaymentPurpose
    status: PaymentStatus
    related_id: int | None = None
    related_model: str | None = None
    payment_method: str
    provider_order_id: str | None
    provider_payment_id: str | None
    receipt: str | None
    notes: str | None
    created_at: datetime | None
    updated_at: datetime | None


class CreateOrderRequest(BaseModel):
    amount: Decimal | None = None
    purpose: str | None = None
    related_id: int | None = None
    related_model: Literal["Contest", "User"] | None = None


class OrderRead(BaseModel):
    id: str
    amount: Decimal
    currency: str
    receipt: str


class CreateOrderResponse(BaseModel):
    message: str
    order: OrderRead
    payment_id: int
    key_id: str


class VerifyPaymentRequest(BaseModel):
    razorpay_payment_id: str = Field(..., min_length=1)
    razorpay_order_id: str = Field(..., min_length=1)
    razorpay_signature: str = Field(..., min_length=1)
    payment_id: int


class VerifyPaymentResponse(BaseModel):
    message: str
    payment: PaymentRead


class PaymentStatsRead(BaseModel):
    total_revenue: Decimal
    completed_count: int
    pending_count: int

    model_config = ConfigDict(from_attributes=True)


class PaymentListResponse(BaseModel):
    payments: list[PaymentRead]
    pagination: PaginationRead


class AdminPaymentListResponse(PaymentListResponse):
    stats: PaymentStatsRead
