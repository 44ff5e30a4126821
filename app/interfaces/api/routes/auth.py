"""Endpoints related to authentication and the caller's own profile."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from app.application.use_cases.users import (
    AuthenticationStatus,
    authenticate_user,
    register_user,
    update_profile,
)
from app.domain.entities import User
from app.domain.errors import DomainError
from app.infrastructure.database import get_db
from app.infrastructure.security import create_access_token, password_signature
from app.interfaces.api.dependencies import get_current_active_user
from app.interfaces.api.routes_helpers import to_http_exception
from app.interfaces.api.schemas import (
    AuthResponse,
    LoginRequest,
    ProfileUpdate,
    RegisterRequest,
    Token,
    UserRead,
)

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


def _issue_token(user: User) -> str:
    return create_access_token(
        data={
            "sub": str(user.id),
            "role": user.role,
            "pwd_sig": password_signature(user),
        }
    )


def _authenticate(db: Session, email: str, password: str) -> User:
    user, auth_status = authenticate_user(db, email, password)

    if auth_status is AuthenticationStatus.INVALID_CREDENTIALS:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if auth_status is AuthenticationStatus.SUSPENDED:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is suspended. Please contact administration.",
        )
    return user


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    """Create a student account and sign it in."""

    try:
        user = register_user(
            db,
            name=payload.name,
            email=payload.email,
            password=payload.password,
            department=payload.department,
            year=payload.year,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc

    logger.info("Registered student account %s", user.id)
    return AuthResponse(access_token=_issue_token(user), user=UserRead.model_validate(user))


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user = _authenticate(db, payload.email, payload.password)
    return AuthResponse(access_token=_issue_token(user), user=UserRead.model_validate(user))


# OAuth2PasswordRequestForm keeps the docs "Authorize" button working; username is the email.
@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    """Authenticate by email and return a bearer token."""

    user = _authenticate(db, form_data.username, form_data.password)
    return {
        "access_token": _issue_token(user),
        "token_type": "bearer",
        "role": user.role,
    }


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_active_user)):
    """Return the authenticated user."""

    return UserRead.model_validate(current_user)


@router.put("/update-profile", response_model=UserRead)
def update_current_profile(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        user = update_profile(
            db,
            user=current_user,
            name=payload.name,
            department=payload.department,
            year=payload.year,
            bio=payload.bio,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return UserRead.model_validate(user)
