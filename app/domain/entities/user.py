"""Domain entity representing a user."""

from dataclasses import dataclass, field
from datetime import datetime

ROLE_STUDENT = "student"
ROLE_ADMIN = "admin"
ROLES = (ROLE_STUDENT, ROLE_ADMIN)

ACADEMIC_YEARS = ("1st", "2nd", "3rd", "4th", "PhD", "")


@dataclass
class User:
    """Core attributes describing a platform account."""

    id: int | None
    name: str
    email: str
    password: str
    role: str = ROLE_STUDENT
    avatar: str = "default-avatar.png"
    department: str = ""
    bio: str | None = None
    year: str = ""
    is_active: bool = True
    is_verified: bool = False
    contests: list[int] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def has_role(self, role: str) -> bool:
        """Return ``True`` when the user's role matches ``role``."""

        return self.role.lower() == role.lower()

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.has_role(ROLE_ADMIN)

    def is_student(self) -> bool:
        return self.has_role(ROLE_STUDENT)


@dataclass(frozen=True)
class UserStats:
    """Account counters shown on the administration listing."""

    total_students: int
    total_admins: int
    active_users: int
    inactive_users: int


__all__ = [
    "ACADEMIC_YEARS",
    "ROLES",
    "ROLE_ADMIN",
    "ROLE_STUDENT",
    "User",
    "UserStats",
]
