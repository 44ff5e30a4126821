"""SQLAlchemy models for user accounts."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class UserModel(Base):
    """Database representation of a platform account."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(120), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="student", index=True)
    avatar = Column(String(255), nullable=False, default="default-avatar.png")
    department = Column(String(120), nullable=False, default="")
    bio = Column(String(500), nullable=True)
    year = Column(String(10), nullable=False, default="")
    is_active = Column(Boolean, nullable=False, default=True)
    is_verified = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime, nullable=True, onupdate=now_in_app_naive_datetime)

    contest_links = relationship(
        "UserContestModel",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="UserContestModel.added_at",
        lazy="selectin",
    )


class UserContestModel(Base):
    """Denormalized list of the contests a user registered for."""

    __tablename__ = "user_contest"

    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), primary_key=True
    )
    contest_id = Column(
        Integer, ForeignKey("contest.id", ondelete="CASCADE"), primary_key=True
    )
    added_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["UserModel", "UserContestModel"]
