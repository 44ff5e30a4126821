from .auth import AuthResponse, LoginRequest, ProfileUpdate, RegisterRequest, Token
from .blog import (
    BlogCreate,
    BlogListResponse,
    BlogMutationResponse,
    BlogRead,
    BlogStatusUpdate,
    BlogUpdate,
    CommentCreate,
    CommentRead,
)
from .common import MessageResponse, PaginationRead
from .contest import (
    ContestCreate,
    ContestDetailRead,
    ContestListResponse,
    ContestMutationResponse,
    ContestRead,
    ContestUpdate,
    MyContestListResponse,
    MyContestRead,
    RegistrationPaymentRead,
    RegistrationResponse,
)
from .notification import (
    NotificationCreate,
    NotificationCreatedResponse,
    NotificationListResponse,
    NotificationRead,
)
from .payment import (
    AdminPaymentListResponse,
    CreateOrderRequest,
    CreateOrderResponse,
    OrderRead,
    PaymentListResponse,
    PaymentRead,
    PaymentStatsRead,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
)
from .user import (
    PlatformStatsRead,
    UserActivityRead,
    UserListResponse,
    UserMutationResponse,
    UserRead,
    UserStatsRead,
    UserUpdate,
)

__all__ = [
    "AdminPaymentListResponse",
    "AuthResponse",
    "BlogCreate",
    "BlogListResponse",
    "BlogMutationResponse",
    "BlogRead",
    "BlogStatusUpdate",
    "BlogUpdate",
    "CommentCreate",
    "CommentRead",
    "ContestCreate",
    "ContestDetailRead",
    "ContestListResponse",
    "ContestMutationResponse",
    "ContestRead",
    "ContestUpdate",
    "CreateOrderRequest",
    "CreateOrderResponse",
    "LoginRequest",
    "MessageResponse",
    "MyContestListResponse",
    "MyContestRead",
    "NotificationCreate",
    "NotificationCreatedResponse",
    "NotificationListResponse",
    "NotificationRead",
    "OrderRead",
    "PaginationRead",
    "PaymentListResponse",
    "PaymentRead",
    "PaymentStatsRead",
    "PlatformStatsRead",
    "ProfileUpdate",
    "RegisterRequest",
    "RegistrationPaymentRead",
    "RegistrationResponse",
    "Token",
    "UserActivityRead",
    "UserListResponse",
    "UserMutationResponse",
    "UserRead",
    "UserStatsRead",
    "UserUpdate",
    "VerifyPaymentRequest",
    "VerifyPaymentResponse",
]
