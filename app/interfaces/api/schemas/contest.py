"""Contest schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from app.domain.entities import ContestStatus, ParticipantPaymentStatus, PaymentStatus

from .common import PaginationRead


class ParticipantRead(BaseModel):
    user_id: int
    registered_at: datetime | None
    payment_status: ParticipantPaymentStatus
    payment_id: int | None

    model_config = ConfigDict(from_attributes=True)


class ContestRead(BaseModel):
    id: int
    title: str
    description: str
    category: str
    start_date: datetime
    end_date: datetime
    registration_deadline: datetime
    entry_fee: Decimal
    max_participants: int | None
    location: str
    featured_image: str
    status: ContestStatus
    is_active: bool
    organizers: list[int]
    participants: list[ParticipantRead]
    participant_count: int
    created_at: datetime | None
    updated_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class ContestCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1, max_length=100)
    start_date: datetime
    end_date: datetime
    registration_deadline: datetime
    entry_fee: Decimal = Field(default=Decimal("0"), ge=0)
    max_participants: int | None = Field(default=None, ge=1)
    location: str | None = Field(default=None, max_length=200)
    featured_image: str | None = None


class ContestUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    category: str | None = Field(default=None, max_length=100)
    start_date: datetime | None = None
    end_date: datetime | None = None
    registration_deadline: datetime | None = None
    entry_fee: Decimal | None = Field(default=None, ge=0)
    max_participants: int | None = Field(
        default=None, ge=0, description="0 removes the participant limit"
    )
    location: str | None = Field(default=None, max_length=200)
    featured_image: str | None = None
    status: ContestStatus | None = None
    is_active: bool | None = None

    model_config = ConfigDict(extra="forbid")


class ContestListResponse(BaseModel):
    contests: list[ContestRead]
    pagination: PaginationRead


class ContestDetailRead(BaseModel):
    contest: ContestRead
    is_registered: bool
    registration_status: ParticipantPaymentStatus | None

    model_config = ConfigDict(from_attributes=True)


class MyContestRead(BaseModel):
    contest: ContestRead
    registered_at: datetime | None
    payment_status: ParticipantPaymentStatus


class MyContestListResponse(BaseModel):
    contests: list[MyContestRead]
    pagination: PaginationRead


class RegistrationPaymentRead(BaseModel):
    id: int
    amount: Decimal
    currency: str
    status: PaymentStatus

    model_config = ConfigDict(from_attributes=True)


class RegistrationResponse(BaseModel):
    message: str
    contest_id: int
    payment_required: bool
    payment_status: ParticipantPaymentStatus
    payment: RegistrationPaymentRead | None = None


class ContestMutationResponse(BaseModel):
    message: str
    contest: ContestRead
