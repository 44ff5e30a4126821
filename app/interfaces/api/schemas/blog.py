"""Blog schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.domain.entities import BlogStatus

from .common import PaginationRead


class CommentRead(BaseModel):
    id: int | None
    user_id: int
    text: str
    name: str | None
    avatar: str | None
    date: datetime | None

    model_config = ConfigDict(from_attributes=True)


class BlogRead(BaseModel):
    id: int
    title: str
    content: str
    author_id: int
    status: BlogStatus
    rejection_reason: str
    featured_image: str
    tags: list[str]
    views: int
    comments: list[CommentRead]
    created_at: datetime | None
    updated_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class BlogCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=100)
    content: str = Field(..., min_length=1)
    tags: list[str] | str | None = Field(
        default=None, description="List of tags or a comma separated string"
    )
    featured_image: str | None = None


class BlogUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=100)
    content: str | None = Field(default=None, min_length=1)
    tags: list[str] | str | None = None
    featured_image: str | None = None

    model_config = ConfigDict(extra="forbid")


class BlogStatusUpdate(BaseModel):
    status: Literal["approved", "rejected"]
    rejection_reason: str | None = None


class CommentCreate(BaseModel):
    text: str = Field(..., min_length=1)


class BlogListResponse(BaseModel):
    blogs: list[BlogRead]
    pagination: PaginationRead


class BlogMutationResponse(BaseModel):
    message: str
    blog: BlogRead
