"""Use case for promoting a user to administrator."""

from dataclasses import replace

from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    NotificationDispatcher,
    notify_role_changed,
)
from app.domain.entities import ROLE_ADMIN, User
from app.domain.errors import ConflictError, NotFoundError
from app.infrastructure.repositories import UserRepository


def make_admin(
    session: Session,
    dispatcher: NotificationDispatcher,
    *,
    user_id: int,
    admin: User,
) -> User:
    repository = UserRepository(session)
    user = repository.get(user_id)
    if user is None:
        raise NotFoundError("User not found")
    if user.is_admin():
        raise ConflictError("User is already an admin")

    promoted = repository.update(replace(user, role=ROLE_ADMIN))
    notify_role_changed(dispatcher, promoted, admin=admin)
    return promoted
