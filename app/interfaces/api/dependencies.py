"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import NotificationDispatcher
from app.domain.entities import User
from app.infrastructure.database import get_db
from app.infrastructure.notifications import LivePushPublisher, SessionRegistry
from app.infrastructure.payment_gateway import (
    PaymentGatewayConfigurationError,
    RazorpayGateway,
    build_payment_gateway,
)
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import decode_access_token, password_signature

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token", auto_error=False)


def _credentials_exception(detail: str = "Invalid credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the authenticated user for the provided token."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _credentials_exception() from exc

    subject = payload.get("sub")
    signature_claim = payload.get("pwd_sig")
    if subject is None or not isinstance(signature_claim, str):
        raise _credentials_exception()
    try:
        user_id = int(subject)
    except (TypeError, ValueError) as exc:
        raise _credentials_exception() from exc

    user = UserRepository(db).get(user_id)
    if user is None:
        raise _credentials_exception("User not found")

    if signature_claim != password_signature(user):
        raise _credentials_exception()

    return user


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    return resolve_current_user(token, db)


def get_optional_user(
    token: str | None = Depends(optional_oauth2_scheme),
    db: Session = Depends(get_db),
) -> User | None:
    """Return the caller when a valid token is sent, ``None`` for anonymous calls."""

    if not token:
        return None
    try:
        user = resolve_current_user(token, db)
    except HTTPException:
        return None
    return user if user.is_active else None


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user is active."""

    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is suspended",
        )
    return current_user


def require_admin(current_user: User = Depends(get_current_active_user)) -> User:
    """Ensure the authenticated user has administrator privileges."""

    if not current_user.is_admin():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user


def require_student(current_user: User = Depends(get_current_active_user)) -> User:
    if not current_user.is_student():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Student access required",
        )
    return current_user


def get_session_registry(request: Request) -> SessionRegistry:
    return request.app.state.session_registry


def get_notification_dispatcher(
    registry: SessionRegistry = Depends(get_session_registry),
    db: Session = Depends(get_db),
) -> NotificationDispatcher:
    """Return a dispatcher storing on the request session and pushing live."""

    return NotificationDispatcher(db, LivePushPublisher(registry))


def get_payment_gateway() -> RazorpayGateway:
    """Return a configured instance of :class:`RazorpayGateway`."""

    try:
        return build_payment_gateway()
    except PaymentGatewayConfigurationError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(exc),
        ) from exc
