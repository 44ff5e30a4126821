"""SQLAlchemy models for contests and their participants."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class ContestModel(Base):
    """Database representation of a contest."""

    __tablename__ = "contest"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(100), nullable=False, index=True)
    featured_image = Column(String(255), nullable=False, default="default-contest.jpg")
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    registration_deadline = Column(DateTime, nullable=False)
    entry_fee = Column(Numeric(12, 2), nullable=False, default=0)
    max_participants = Column(Integer, nullable=True)
    location = Column(String(200), nullable=False, default="Online")
    status = Column(String(20), nullable=False, default="upcoming", index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    organizers = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime, nullable=True, onupdate=now_in_app_naive_datetime)

    participants = relationship(
        "ContestParticipantModel",
        back_populates="contest",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ContestParticipantModel.id",
        lazy="selectin",
    )


class ContestParticipantModel(Base):
    """Registration of a user in a contest."""

    __tablename__ = "contest_participant"
    __table_args__ = (
        UniqueConstraint("contest_id", "user_id", name="uq_contest_participant"),
    )

    id = Column(Integer, primary_key=True)
    contest_id = Column(
        Integer,
        ForeignKey("contest.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(
        Integer,
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    registered_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    payment_status = Column(String(20), nullable=False, default="pending")
    payment_id = Column(
        Integer, ForeignKey("payment.id", ondelete="SET NULL"), nullable=True
    )

    contest = relationship("ContestModel", back_populates="participants")


__all__ = ["ContestModel", "ContestParticipantModel"]
