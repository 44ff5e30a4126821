"""Repository implementations for infrastructure layer."""

from .blog_repository import BlogRepository
from .contest_repository import ContestRepository
from .notification_repository import NotificationRepository
from .payment_repository import PaymentRepository
from .user_repository import UserRepository

__all__ = [
    "BlogRepository",
    "ContestRepository",
    "NotificationRepository",
    "PaymentRepository",
    "UserRepository",
]
