"""Routes for managing user accounts."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import NotificationDispatcher
from app.application.use_cases.users import (
    delete_user as delete_user_uc,
    get_platform_stats,
    get_user_activity,
    list_users as list_users_uc,
    make_admin as make_admin_uc,
    update_user as update_user_uc,
)
from app.domain.entities import User
from app.domain.errors import DomainError
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_notification_dispatcher, require_admin
from app.interfaces.api.routes_helpers import to_http_exception
from app.interfaces.api.schemas import (
    MessageResponse,
    PaginationRead,
    PlatformStatsRead,
    UserActivityRead,
    UserListResponse,
    UserMutationResponse,
    UserRead,
    UserStatsRead,
    UserUpdate,
)

router = APIRouter(prefix="/users", tags=["users"])


def _to_read_model(user: User) -> UserRead:
    return UserRead.model_validate(user)


@router.get("/", response_model=UserListResponse)
def list_users(
    role: str | None = None,
    is_active: bool | None = None,
    search: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    """Return a page of users with account counters."""

    listing = list_users_uc(
        db, role=role, is_active=is_active, search=search, page=page, limit=limit
    )
    return UserListResponse(
        users=[_to_read_model(user) for user in listing.page.items],
        stats=UserStatsRead.model_validate(listing.stats),
        pagination=PaginationRead.from_page(listing.page),
    )


@router.get("/stats", response_model=PlatformStatsRead)
def read_platform_stats(
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    return PlatformStatsRead.model_validate(get_platform_stats(db))


@router.get("/{user_id}", response_model=UserActivityRead)
def read_user(
    user_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    """Return a user together with a summary of their activity."""

    try:
        activity = get_user_activity(db, user_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return UserActivityRead.model_validate(activity)


@router.put("/{user_id}", response_model=UserMutationResponse)
def update_user(
    user_id: int,
    user_in: UserUpdate,
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
    current_user: User = Depends(require_admin),
):
    update_data = user_in.model_dump(exclude_unset=True)
    try:
        user = update_user_uc(
            db, dispatcher, user_id=user_id, admin=current_user, **update_data
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return UserMutationResponse(message="User updated successfully", user=_to_read_model(user))


@router.delete("/{user_id}", response_model=MessageResponse, status_code=status.HTTP_200_OK)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Delete a user and everything tied to the account."""

    try:
        delete_user_uc(db, user_id, admin=current_user)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return MessageResponse(message="User deleted successfully")


@router.put("/{user_id}/make-admin", response_model=UserMutationResponse)
def make_admin(
    user_id: int,
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
    current_user: User = Depends(require_admin),
):
    try:
        user = make_admin_uc(db, dispatcher, user_id=user_id, admin=current_user)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return UserMutationResponse(
        message="User promoted to admin successfully", user=_to_read_model(user)
    )
