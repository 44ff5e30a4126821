"""Endpoints and websocket handler for notifications."""

from __future__ import annotations

import logging

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Query,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    NotificationDispatcher,
    announce,
    delete_notification as delete_notification_uc,
    list_all_notifications as list_all_notifications_uc,
    list_notifications_for,
    mark_notification_read,
)
from app.domain.entities import (
    BlogRef,
    ContestRef,
    Notification,
    NotificationRelation,
    NotificationView,
    PaymentRef,
    RelatedTo,
    User,
)
from app.domain.errors import DomainError, InvalidSpecError
from app.infrastructure.database import SessionLocal, get_db
from app.infrastructure.notifications import SessionRegistry
from app.interfaces.api.dependencies import (
    get_current_active_user,
    get_notification_dispatcher,
    require_admin,
    resolve_current_user,
)
from app.interfaces.api.routes_helpers import to_http_exception
from app.interfaces.api.schemas import (
    MessageResponse,
    NotificationCreate,
    NotificationCreatedResponse,
    NotificationListResponse,
    NotificationRead,
    PaginationRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)

_RELATION_TYPES = {
    RelatedTo.BLOG: BlogRef,
    RelatedTo.CONTEST: ContestRef,
    RelatedTo.PAYMENT: PaymentRef,
}


def _notification_to_schema(
    notification: Notification, *, is_read_by_me: bool | None = None
) -> NotificationRead:
    relation = notification.relation
    return NotificationRead(
        id=notification.id or 0,
        title=notification.title,
        message=notification.message,
        sender_id=notification.sender_id,
        recipients=notification.recipients,
        target_users=list(notification.target_users),
        urgency_level=notification.urgency_level,
        related_to=notification.related_to,
        related_id=relation.id if relation else None,
        notification_type=relation.model if relation else None,
        created_at=notification.created_at,
        is_read_by_me=is_read_by_me,
    )


def _view_to_schema(view: NotificationView) -> NotificationRead:
    return _notification_to_schema(view.notification, is_read_by_me=view.is_read_by_me)


def _relation_from_request(payload: NotificationCreate) -> NotificationRelation | None:
    if payload.related_id is None:
        return None
    relation_type = _RELATION_TYPES.get(payload.related_to)
    if relation_type is None:
        raise InvalidSpecError(
            f"Notifications about '{payload.related_to.value}' cannot reference a record"
        )
    return relation_type(payload.related_id)


@router.post(
    "/",
    response_model=NotificationCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_notification(
    payload: NotificationCreate,
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
    current_user: User = Depends(require_admin),
):
    """Send an announcement to every student or to a chosen list of users."""

    try:
        notification = announce(
            dispatcher,
            sender=current_user,
            title=payload.title,
            message=payload.message,
            recipients=payload.recipients,
            target_users=payload.target_users,
            urgency_level=payload.urgency_level,
            related_to=payload.related_to,
            relation=_relation_from_request(payload),
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return NotificationCreatedResponse(
        message="Notification sent successfully",
        notification=_notification_to_schema(notification),
    )


@router.get("/", response_model=NotificationListResponse)
def list_notifications(
    unread_only: bool = False,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Return the notifications addressed to the authenticated user."""

    result = list_notifications_for(
        db, current_user.id, unread_only=unread_only, page=page, limit=limit
    )
    return NotificationListResponse(
        notifications=[_view_to_schema(view) for view in result.items],
        pagination=PaginationRead.from_page(result),
    )


@router.get("/all", response_model=NotificationListResponse)
def list_all_notifications(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    result = list_all_notifications_uc(db, page=page, limit=limit)
    return NotificationListResponse(
        notifications=[_notification_to_schema(item) for item in result.items],
        pagination=PaginationRead.from_page(result),
    )


@router.put("/{notification_id}/read", response_model=NotificationRead)
def read_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        view = mark_notification_read(db, notification_id, user_id=current_user.id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _view_to_schema(view)


@router.delete("/{notification_id}", response_model=MessageResponse)
def delete_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    try:
        delete_notification_uc(db, notification_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return MessageResponse(message="Notification deleted successfully")


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams live notifications to the authenticated user."""

    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=1008)
        return

    session = SessionLocal()
    try:
        user = resolve_current_user(token, session)
        if not user.is_active:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is suspended")
        unread = list_notifications_for(session, user.id, unread_only=True).total
    except HTTPException:
        await websocket.close(code=1008)
        return
    finally:
        session.close()

    registry: SessionRegistry = websocket.app.state.session_registry
    await registry.connect(user.id, websocket)
    try:
        await websocket.send_json(
            {"type": "init", "data": {"user_id": user.id, "unread": unread}}
        )
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except ValueError:
                continue

            if isinstance(message, dict) and message.get("type") == "ping":
                await websocket.send_json({"type": "pong"})
    except WebSocketDisconnect:
        logger.info("Live session closed for user %s", user.id)
    finally:
        registry.disconnect(user.id, websocket)
