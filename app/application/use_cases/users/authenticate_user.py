"""Use case for checking sign-in credentials."""

from enum import Enum, auto

from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import verify_password


class AuthenticationStatus(Enum):
    """Outcome of a sign-in attempt."""

    SUCCESS = auto()
    INVALID_CREDENTIALS = auto()
    SUSPENDED = auto()


def authenticate_user(
    session: Session, email: str, password: str
) -> tuple[User | None, AuthenticationStatus]:
    """Check ``email``/``password`` against the stored account.

    Unknown emails and wrong passwords are reported the same way. A suspended
    account is only reported once the password matched, so suspension does not
    leak for guessed credentials.
    """

    user = UserRepository(session).get_by_email(email.strip())
    if user is None or not verify_password(password, user.password):
        return None, AuthenticationStatus.INVALID_CREDENTIALS

    if not user.is_active:
        return user, AuthenticationStatus.SUSPENDED

    return user, AuthenticationStatus.SUCCESS
