"""SQLAlchemy models for blog posts and comments."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class BlogModel(Base):
    """Database representation of a blog post."""

    __tablename__ = "blog"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(100), nullable=False)
    content = Column(Text, nullable=False)
    featured_image = Column(String(255), nullable=False, default="default-blog.jpg")
    author_id = Column(
        Integer,
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    status = Column(String(20), nullable=False, default="pending", index=True)
    rejection_reason = Column(Text, nullable=False, default="")
    tags = Column(JSON, nullable=False, default=list)
    views = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime, nullable=True, onupdate=now_in_app_naive_datetime)

    comments = relationship(
        "BlogCommentModel",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="BlogCommentModel.id.desc()",
        lazy="selectin",
    )


class BlogCommentModel(Base):
    __tablename__ = "blog_comment"

    id = Column(Integer, primary_key=True)
    blog_id = Column(
        Integer,
        ForeignKey("blog.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False
    )
    text = Column(Text, nullable=False)
    name = Column(String(100), nullable=True)
    avatar = Column(String(255), nullable=True)
    date = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["BlogModel", "BlogCommentModel"]
