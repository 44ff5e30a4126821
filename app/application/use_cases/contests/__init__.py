"""Use cases for contests and their registrations."""

from .create_contest import create_contest
from .get_contest import get_contest
from .list_contests import list_contests, list_my_contests
from .refresh_status import refresh_contest_status
from .register_for_contest import RegistrationResult, register_for_contest
from .update_contest import update_contest

__all__ = [
    "RegistrationResult",
    "create_contest",
    "get_contest",
    "list_contests",
    "list_my_contests",
    "refresh_contest_status",
    "register_for_contest",
    "update_contest",
]
