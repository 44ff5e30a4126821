"""Persistence layer for blog posts and their comments."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.domain.entities import Blog, BlogStatus, Comment
from app.infrastructure.models import BlogCommentModel, BlogModel
from app.utils import ensure_app_timezone, now_in_app_naive_datetime


class BlogRepository:
    """Provide CRUD operations for :class:`Blog` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, blog_id: int) -> Blog | None:
        model = self.session.get(BlogModel, blog_id)
        return self._to_entity(model) if model else None

    def list(
        self,
        *,
        status: str | None = None,
        author_id: int | None = None,
        tag: str | None = None,
        search: str | None = None,
        skip: int = 0,
        limit: int | None = 10,
    ) -> Sequence[Blog]:
        query = self._filtered_query(
            status=status, author_id=author_id, tag=tag, search=search
        )
        query = query.order_by(BlogModel.created_at.desc(), BlogModel.id.desc())
        models = query.all()
        # Tags live in a JSON column, so the tag filter runs in memory.
        if tag:
            models = [model for model in models if tag in (model.tags or [])]
        end = None if limit is None else skip + limit
        return [self._to_entity(model) for model in models[skip:end]]

    def count(
        self,
        *,
        status: str | None = None,
        author_id: int | None = None,
        tag: str | None = None,
        search: str | None = None,
    ) -> int:
        query = self._filtered_query(
            status=status, author_id=author_id, tag=tag, search=search
        )
        if not tag:
            return query.count()
        return sum(1 for model in query.all() if tag in (model.tags or []))

    def create(self, blog: Blog) -> Blog:
        model = BlogModel()
        self._apply_entity_to_model(model, blog)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, blog: Blog) -> Blog:
        model = self.session.get(BlogModel, blog.id)
        if model is None:
            msg = f"Blog with id {blog.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, blog)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, blog_id: int) -> None:
        model = self.session.get(BlogModel, blog_id)
        if model is None:
            msg = f"Blog with id {blog_id} not found"
            raise ValueError(msg)
        self.session.delete(model)
        self.session.commit()

    def increment_views(self, blog_id: int) -> None:
        self.session.query(BlogModel).filter(BlogModel.id == blog_id).update(
            {BlogModel.views: BlogModel.views + 1}, synchronize_session=False
        )
        self.session.commit()

    def add_comment(self, blog_id: int, comment: Comment) -> Blog:
        """Attach ``comment`` to the blog and return the refreshed post."""

        model = self.session.get(BlogModel, blog_id)
        if model is None:
            msg = f"Blog with id {blog_id} not found"
            raise ValueError(msg)
        model.comments.append(
            BlogCommentModel(
                user_id=comment.user_id,
                text=comment.text,
                name=comment.name,
                avatar=comment.avatar,
                date=now_in_app_naive_datetime(),
            )
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def _filtered_query(
        self,
        *,
        status: str | None,
        author_id: int | None,
        tag: str | None,
        search: str | None,
    ):
        query = self.session.query(BlogModel)
        if status:
            query = query.filter(BlogModel.status == status)
        if author_id is not None:
            query = query.filter(BlogModel.author_id == author_id)
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(BlogModel.title.ilike(pattern), BlogModel.content.ilike(pattern))
            )
        return query

    @staticmethod
    def _apply_entity_to_model(model: BlogModel, blog: Blog) -> None:
        model.title = blog.title
        model.content = blog.content
        model.author_id = blog.author_id
        model.status = blog.status.value
        model.rejection_reason = blog.rejection_reason
        model.featured_image = blog.featured_image
        model.tags = list(blog.tags)

    @staticmethod
    def _to_entity(model: BlogModel) -> Blog:
        return Blog(
            id=model.id,
            title=model.title,
            content=model.content,
            author_id=model.author_id,
            status=BlogStatus(model.status),
            rejection_reason=model.rejection_reason or "",
            featured_image=model.featured_image,
            tags=list(model.tags or []),
            views=model.views or 0,
            comments=[
                Comment(
                    id=comment.id,
                    user_id=comment.user_id,
                    text=comment.text,
                    name=comment.name,
                    avatar=comment.avatar,
                    date=ensure_app_timezone(comment.date),
                )
                for comment in model.comments
            ],
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["BlogRepository"]
