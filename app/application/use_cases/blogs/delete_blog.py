"""Use case for deleting blog posts."""

from sqlalchemy.orm import Session

from app.domain.entities import User
from app.domain.errors import ForbiddenError, NotFoundError
from app.infrastructure.repositories import BlogRepository


def delete_blog(session: Session, blog_id: int, *, user: User) -> None:
    repository = BlogRepository(session)
    blog = repository.get(blog_id)
    if blog is None:
        raise NotFoundError("Blog not found")
    if blog.author_id != user.id and not user.is_admin():
        raise ForbiddenError("Not authorized to delete this blog")
    repository.delete(blog_id)
