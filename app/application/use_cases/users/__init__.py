"""Use cases for managing users."""

from .authenticate_user import AuthenticationStatus, authenticate_user
from .create_user import create_user, register_user
from .delete_user import delete_user
from .get_user import UserActivity, get_user, get_user_activity
from .list_users import PlatformStats, UserListing, get_platform_stats, list_users
from .make_admin import make_admin
from .update_user import update_profile, update_user

__all__ = [
    "AuthenticationStatus",
    "PlatformStats",
    "UserActivity",
    "UserListing",
    "authenticate_user",
    "create_user",
    "delete_user",
    "get_platform_stats",
    "get_user",
    "get_user_activity",
    "list_users",
    "make_admin",
    "register_user",
    "update_profile",
    "update_user",
]
