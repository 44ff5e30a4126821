"""Domain entities exposed by the application."""

from .blog import Blog, BlogStatus, Comment
from .contest import (
    Contest,
    ContestDetail,
    ContestStatus,
    Participant,
    ParticipantPaymentStatus,
    RegisteredContest,
    derive_status,
)
from .notification import (
    Notification,
    NotificationSpec,
    NotificationView,
    RecipientsMode,
    RelatedTo,
    UrgencyLevel,
    related_to_for,
)
from .page import Page, page_offset
from .payment import (
    OrderSummary,
    Payment,
    PaymentPurpose,
    PaymentStats,
    PaymentStatus,
    can_transition,
)
from .relation import (
    BlogRef,
    ContestRef,
    NotificationRelation,
    PaymentRef,
    PaymentRelation,
    UserRef,
    reference_from_columns,
    reference_to_columns,
)
from .user import ACADEMIC_YEARS, ROLE_ADMIN, ROLE_STUDENT, ROLES, User, UserStats

__all__ = [
    "ACADEMIC_YEARS",
    "Blog",
    "BlogRef",
    "BlogStatus",
    "Comment",
    "Contest",
    "ContestDetail",
    "ContestRef",
    "ContestStatus",
    "Notification",
    "NotificationRelation",
    "NotificationSpec",
    "NotificationView",
    "OrderSummary",
    "Page",
    "Participant",
    "ParticipantPaymentStatus",
    "Payment",
    "PaymentPurpose",
    "PaymentRef",
    "PaymentRelation",
    "PaymentStats",
    "PaymentStatus",
    "ROLES",
    "ROLE_ADMIN",
    "ROLE_STUDENT",
    "RecipientsMode",
    "RegisteredContest",
    "RelatedTo",
    "UrgencyLevel",
    "User",
    "UserRef",
    "UserStats",
    "can_transition",
    "derive_status",
    "page_offset",
    "reference_from_columns",
    "reference_to_columns",
    "related_to_for",
]
