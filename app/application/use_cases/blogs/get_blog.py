"""Use case for reading a single blog post."""

from dataclasses import replace

from sqlalchemy.orm import Session

from app.domain.entities import Blog, User
from app.domain.errors import ForbiddenError, NotFoundError
from app.infrastructure.repositories import BlogRepository


def get_blog(session: Session, blog_id: int, *, viewer: User | None = None) -> Blog:
    """Return the post; unpublished posts are visible to their author and admins.

    Reading a published post counts a view unless the reader is the author.
    """

    repository = BlogRepository(session)
    blog = repository.get(blog_id)
    if blog is None:
        raise NotFoundError("Blog not found")

    is_author = viewer is not None and viewer.id == blog.author_id
    is_admin = viewer is not None and viewer.is_admin()
    if not blog.is_published() and not (is_author or is_admin):
        raise ForbiddenError("This blog is not published yet")

    if blog.is_published() and not is_author:
        repository.increment_views(blog.id)
        blog = replace(blog, views=blog.views + 1)
    return blog
