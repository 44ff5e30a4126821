"""Use cases for listing blog posts."""

from sqlalchemy.orm import Session

from app.domain.entities import Blog, BlogStatus, Page, User, page_offset
from app.infrastructure.repositories import BlogRepository


def list_blogs(
    session: Session,
    *,
    viewer: User | None = None,
    status: str | None = None,
    tag: str | None = None,
    search: str | None = None,
    page: int = 1,
    limit: int = 10,
) -> Page[Blog]:
    """Return blogs newest first.

    Only administrators may filter by status; everybody else sees approved
    posts only.
    """

    if viewer is None or not viewer.is_admin():
        status = BlogStatus.APPROVED.value

    repository = BlogRepository(session)
    return Page(
        items=list(
            repository.list(
                status=status,
                tag=tag,
                search=search,
                skip=page_offset(page, limit),
                limit=limit,
            )
        ),
        total=repository.count(status=status, tag=tag, search=search),
        page=page,
        limit=limit,
    )


def list_my_blogs(
    session: Session,
    author_id: int,
    *,
    status: str | None = None,
    page: int = 1,
    limit: int = 10,
) -> Page[Blog]:
    repository = BlogRepository(session)
    return Page(
        items=list(
            repository.list(
                author_id=author_id,
                status=status,
                skip=page_offset(page, limit),
                limit=limit,
            )
        ),
        total=repository.count(author_id=author_id, status=status),
        page=page,
        limit=limit,
    )
