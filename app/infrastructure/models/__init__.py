"""ORM models used by the application infrastructure."""

from .blog import BlogCommentModel, BlogModel
from .contest import ContestModel, ContestParticipantModel
from .notification import NotificationModel, NotificationRecipientModel
from .payment import PaymentModel
from .user import UserContestModel, UserModel

__all__ = [
    "BlogCommentModel",
    "BlogModel",
    "ContestModel",
    "ContestParticipantModel",
    "NotificationModel",
    "NotificationRecipientModel",
    "PaymentModel",
    "UserContestModel",
    "UserModel",
]
