"""Use cases for updating user information."""

from dataclasses import replace

from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    NotificationDispatcher,
    notify_account_suspended,
)
from app.domain.entities import User
from app.domain.errors import ConflictError, NotFoundError
from app.infrastructure.repositories import UserRepository

from .validators import ensure_valid_role, ensure_valid_year, normalize_email


def update_user(
    session: Session,
    dispatcher: NotificationDispatcher,
    *,
    user_id: int,
    admin: User,
    name: str | None = None,
    email: str | None = None,
    role: str | None = None,
    is_active: bool | None = None,
    department: str | None = None,
    year: str | None = None,
    is_verified: bool | None = None,
) -> User:
    """Update the provided user; suspending an account notifies its owner."""

    repository = UserRepository(session)
    current_user = repository.get(user_id)
    if current_user is None:
        raise NotFoundError("User not found")

    new_email = current_user.email
    if email is not None and normalize_email(email) != current_user.email:
        existing_with_email = repository.get_by_email(email)
        if existing_with_email and existing_with_email.id != user_id:
            raise ConflictError("Email is already registered")
        new_email = normalize_email(email)

    updated_user = replace(
        current_user,
        name=name or current_user.name,
        email=new_email,
        role=ensure_valid_role(role) if role else current_user.role,
        is_active=is_active if is_active is not None else current_user.is_active,
        department=department or current_user.department,
        year=ensure_valid_year(year) if year else current_user.year,
        is_verified=(
            is_verified if is_verified is not None else current_user.is_verified
        ),
    )
    saved = repository.update(updated_user)

    if current_user.is_active and not saved.is_active:
        notify_account_suspended(dispatcher, saved, admin=admin)
    return saved


def update_profile(
    session: Session,
    *,
    user: User,
    name: str | None = None,
    department: str | None = None,
    year: str | None = None,
    bio: str | None = None,
) -> User:
    """Let a user edit the descriptive fields of their own profile."""

    repository = UserRepository(session)
    current_user = repository.get(user.id)
    if current_user is None:
        raise NotFoundError("User not found")

    updated_user = replace(
        current_user,
        name=name or current_user.name,
        department=department if department is not None else current_user.department,
        year=ensure_valid_year(year) if year is not None else current_user.year,
        bio=bio if bio is not None else current_user.bio,
    )
    return repository.update(updated_user)
