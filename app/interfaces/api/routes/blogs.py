"""Routes for blog posts, their moderation and comments."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.application.use_cases.blogs import (
    add_comment as add_comment_uc,
    change_blog_status as change_blog_status_uc,
    create_blog as create_blog_uc,
    delete_blog as delete_blog_uc,
    get_blog as get_blog_uc,
    list_blogs as list_blogs_uc,
    list_my_blogs as list_my_blogs_uc,
    update_blog as update_blog_uc,
)
from app.application.use_cases.notifications import NotificationDispatcher
from app.domain.entities import Blog, User
from app.domain.errors import DomainError
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import (
    get_current_active_user,
    get_notification_dispatcher,
    get_optional_user,
    require_admin,
    require_student,
)
from app.interfaces.api.routes_helpers import to_http_exception
from app.interfaces.api.schemas import (
    BlogCreate,
    BlogListResponse,
    BlogMutationResponse,
    BlogRead,
    BlogStatusUpdate,
    BlogUpdate,
    CommentCreate,
    CommentRead,
    MessageResponse,
    PaginationRead,
)

router = APIRouter(prefix="/blogs", tags=["blogs"])


def _to_read_model(blog: Blog) -> BlogRead:
    return BlogRead.model_validate(blog)


@router.post("/", response_model=BlogMutationResponse, status_code=status.HTTP_201_CREATED)
def create_blog(
    blog_in: BlogCreate,
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
    current_user: User = Depends(require_student),
):
    """Submit a post for moderation."""

    try:
        blog = create_blog_uc(
            db,
            dispatcher,
            author=current_user,
            title=blog_in.title,
            content=blog_in.content,
            tags=blog_in.tags,
            featured_image=blog_in.featured_image,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return BlogMutationResponse(
        message="Blog submitted for approval", blog=_to_read_model(blog)
    )


@router.get("/", response_model=BlogListResponse)
def list_blogs(
    status_filter: str | None = Query(None, alias="status"),
    tag: str | None = None,
    search: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    viewer: User | None = Depends(get_optional_user),
):
    """Return published posts; administrators may filter by any status."""

    result = list_blogs_uc(
        db,
        viewer=viewer,
        status=status_filter,
        tag=tag,
        search=search,
        page=page,
        limit=limit,
    )
    return BlogListResponse(
        blogs=[_to_read_model(blog) for blog in result.items],
        pagination=PaginationRead.from_page(result),
    )


@router.get("/my-blogs", response_model=BlogListResponse)
def list_my_blogs(
    status_filter: str | None = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    result = list_my_blogs_uc(
        db, current_user.id, status=status_filter, page=page, limit=limit
    )
    return BlogListResponse(
        blogs=[_to_read_model(blog) for blog in result.items],
        pagination=PaginationRead.from_page(result),
    )


@router.get("/{blog_id}", response_model=BlogRead)
def read_blog(
    blog_id: int,
    db: Session = Depends(get_db),
    viewer: User | None = Depends(get_optional_user),
):
    try:
        blog = get_blog_uc(db, blog_id, viewer=viewer)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _to_read_model(blog)


@router.put("/{blog_id}", response_model=BlogMutationResponse)
def update_blog(
    blog_id: int,
    blog_in: BlogUpdate,
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
    current_user: User = Depends(get_current_active_user),
):
    update_data = blog_in.model_dump(exclude_unset=True)
    try:
        blog = update_blog_uc(db, dispatcher, blog_id, editor=current_user, **update_data)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return BlogMutationResponse(message="Blog updated successfully", blog=_to_read_model(blog))


@router.delete("/{blog_id}", response_model=MessageResponse)
def delete_blog(
    blog_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        delete_blog_uc(db, blog_id, user=current_user)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return MessageResponse(message="Blog deleted successfully")


@router.put("/{blog_id}/status", response_model=BlogMutationResponse)
def change_blog_status(
    blog_id: int,
    status_in: BlogStatusUpdate,
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
    current_user: User = Depends(require_admin),
):
    """Approve or reject a post."""

    try:
        blog = change_blog_status_uc(
            db,
            dispatcher,
            blog_id,
            reviewer=current_user,
            status=status_in.status,
            rejection_reason=status_in.rejection_reason,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return BlogMutationResponse(
        message=f"Blog {blog.status.value} successfully", blog=_to_read_model(blog)
    )


@router.post(
    "/{blog_id}/comments",
    response_model=list[CommentRead],
    status_code=status.HTTP_201_CREATED,
)
def add_comment(
    blog_id: int,
    comment_in: CommentCreate,
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
    current_user: User = Depends(get_current_active_user),
):
    try:
        comments = add_comment_uc(
            db, dispatcher, blog_id, user=current_user, text=comment_in.text
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return [CommentRead.model_validate(comment) for comment in comments]
