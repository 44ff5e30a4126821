"""Domain entities for contests and their registrations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum


class ContestStatus(str, Enum):
    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ParticipantPaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class Participant:
    """Registration of a single user inside a contest."""

    user_id: int
    registered_at: datetime | None
    payment_status: ParticipantPaymentStatus
    payment_id: int | None = None


@dataclass
class Contest:
    """A scheduled competition students can register for."""

    id: int | None
    title: str
    description: str
    category: str
    start_date: datetime
    end_date: datetime
    registration_deadline: datetime
    entry_fee: Decimal = Decimal("0")
    max_participants: int | None = None
    location: str = "Online"
    featured_image: str = "default-contest.jpg"
    status: ContestStatus = ContestStatus.UPCOMING
    is_active: bool = True
    organizers: list[int] = field(default_factory=list)
    participants: list[Participant] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def participant_count(self) -> int:
        return len(self.participants)

    @property
    def requires_payment(self) -> bool:
        return self.entry_fee > 0

    def is_full(self) -> bool:
        """Return ``True`` when a bounded contest has no free slot left."""

        if not self.max_participants:
            return False
        return len(self.participants) >= self.max_participants

    def is_registration_open(self, now: datetime) -> bool:
        return now <= self.registration_deadline and self.status is not ContestStatus.CANCELLED

    def find_participant(self, user_id: int) -> Participant | None:
        for participant in self.participants:
            if participant.user_id == user_id:
                return participant
        return None


def derive_status(now: datetime, contest: Contest) -> ContestStatus:
    """Return the lifecycle status of ``contest`` at ``now``.

    Cancellation is absorbing; every other state follows the schedule.
    """

    if contest.status is ContestStatus.CANCELLED:
        return ContestStatus.CANCELLED
    if now < contest.start_date:
        return ContestStatus.UPCOMING
    if now <= contest.end_date:
        return ContestStatus.ONGOING
    return ContestStatus.COMPLETED


@dataclass(frozen=True)
class ContestDetail:
    """A contest together with the viewer's registration state."""

    contest: Contest
    is_registered: bool
    registration_status: ParticipantPaymentStatus | None


@dataclass(frozen=True)
class RegisteredContest:
    """A contest listed from the point of view of one participant."""

    contest: Contest
    participant: Participant


__all__ = [
    "Contest",
    "ContestDetail",
    "ContestStatus",
    "Participant",
    "ParticipantPaymentStatus",
    "RegisteredContest",
    "derive_status",
]
