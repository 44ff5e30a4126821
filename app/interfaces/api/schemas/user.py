"""User schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.domain.entities import BlogStatus, ContestStatus

from .common import PaginationRead

AcademicYear = Literal["1st", "2nd", "3rd", "4th", "PhD", ""]


class UserRead(BaseModel):
    id: int
    name: str
    email: EmailStr
    role: str
    avatar: str
    department: str
    bio: str | None
    year: str
    is_active: bool
    is_verified: bool
    contests: list[int]
    created_at: datetime | None
    updated_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class UserUpdate(BaseModel):
    name: str | None = Field(default=None, max_length=100)
    email: EmailStr | None = None
    role: Literal["student", "admin"] | None = None
    is_active: bool | None = None
    department: str | None = Field(default=None, max_length=120)
    year: AcademicYear | None = None
    is_verified: bool | None = None

    model_config = ConfigDict(extra="forbid")


class UserStatsRead(BaseModel):
    total_students: int
    total_admins: int
    active_users: int
    inactive_users: int

    model_config = ConfigDict(from_attributes=True)


class UserListResponse(BaseModel):
    users: list[UserRead]
    stats: UserStatsRead
    pagination: PaginationRead


class PlatformStatsRead(BaseModel):
    total_users: int
    students: int
    admins: int
    active_users: int
    inactive_users: int
    recent_registrations: int
    total_blogs: int
    pending_blogs: int
    approved_blogs: int
    rejected_blogs: int
    total_contests: int
    active_contests: int

    model_config = ConfigDict(from_attributes=True)


class UserBlogSummaryRead(BaseModel):
    id: int
    title: str
    status: BlogStatus
    views: int
    created_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class UserContestSummaryRead(BaseModel):
    id: int
    title: str
    start_date: datetime
    status: ContestStatus

    model_config = ConfigDict(from_attributes=True)


class UserActivityRead(BaseModel):
    user: UserRead
    recent_blogs: list[UserBlogSummaryRead]
    recent_contests: list[UserContestSummaryRead]
    total_blogs: int
    published_blogs: int
    pending_blogs: int
    registered_contests: int

    model_config = ConfigDict(from_attributes=True)


class UserMutationResponse(BaseModel):
    message: str
    user: UserRead
