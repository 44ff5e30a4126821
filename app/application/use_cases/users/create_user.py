"""Use case for creating users."""

from sqlalchemy.orm import Session

from app.domain.entities import ROLE_STUDENT, User
from app.domain.errors import ConflictError
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import get_password_hash
from app.utils import now_in_app_timezone

from .validators import ensure_valid_role, ensure_valid_year, normalize_email


def create_user(
    session: Session,
    *,
    name: str,
    email: str,
    password: str,
    role: str = ROLE_STUDENT,
    department: str = "",
    year: str = "",
) -> User:
    """Create a new user ensuring unique email addresses."""

    repository = UserRepository(session)
    email = normalize_email(email)
    if repository.get_by_email(email):
        raise ConflictError("User already exists")

    user = User(
        id=None,
        name=name.strip(),
        email=email,
        password=get_password_hash(password),
        role=ensure_valid_role(role),
        department=department,
        year=ensure_valid_year(year),
        created_at=now_in_app_timezone(),
    )
    return repository.create(user)


def register_user(
    session: Session,
    *,
    name: str,
    email: str,
    password: str,
    department: str = "",
    year: str = "",
) -> User:
    """Self-service sign-up; always yields a student account."""

    return create_user(
        session,
        name=name,
        email=email,
        password=password,
        role=ROLE_STUDENT,
        department=department,
        year=year,
    )
