"""SQLAlchemy models for persisted notifications and their recipients."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation of a fan-out notification."""

    __tablename__ = "notification"
    __table_args__ = (
        CheckConstraint(
            "(related_id IS NULL) = (notification_type IS NULL)",
            name="ck_notification_relation_pair",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    sender_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    recipients = Column(String(10), nullable=False, default="all")
    urgency_level = Column(String(10), nullable=False, default="info")
    related_to = Column(String(10), nullable=False, default="general")
    related_id = Column(Integer, nullable=True)
    notification_type = Column(String(20), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)

    targets = relationship(
        "NotificationRecipientModel",
        back_populates="notification",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="NotificationRecipientModel.id",
        lazy="selectin",
    )


class NotificationRecipientModel(Base):
    """One target user of a notification together with its read flag."""

    __tablename__ = "notification_recipient"
    __table_args__ = (
        UniqueConstraint("notification_id", "user_id", name="uq_notification_recipient"),
    )

    id = Column(Integer, primary_key=True)
    notification_id = Column(
        Integer,
        ForeignKey("notification.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    is_read = Column(Boolean, nullable=False, default=False)
    read_at = Column(DateTime(), nullable=True)

    notification = relationship("NotificationModel", back_populates="targets")


__all__ = ["NotificationModel", "NotificationRecipientModel"]
